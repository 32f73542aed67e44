import os
import tempfile

# must be in place before hrdesk.database builds its engine; a file-backed
# database survives the engine.dispose() run by the app's lifespan shutdown
_DB_DIR = tempfile.mkdtemp(prefix="hrdesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"

from datetime import date

import pytest
from fastapi.testclient import TestClient
from werkzeug.security import generate_password_hash

from hrdesk import database
from hrdesk.auth.jwt_handler import create_access_token
from hrdesk.employees.models import Admin, Employee
from hrdesk.main import app


@pytest.fixture(autouse=True)
def upload_dir(monkeypatch, tmp_path):
    path = tmp_path / "uploads"
    monkeypatch.setenv("UPLOAD_DIR", str(path))
    monkeypatch.setenv("EMAIL_USER", "hr@example.com")
    monkeypatch.setenv("EMAIL_PASS", "app-password")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.delenv("EXPOSE_CREATED_PASSWORD", raising=False)
    monkeypatch.delenv("ASSETS_DIR", raising=False)
    return path


@pytest.fixture
def db():
    database.init_db()
    session = database.SessionLocal()
    yield session
    session.close()
    database.Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_employee(db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            name=f"Asha Kumari {n}",
            email=f"asha{n}@example.com",
            phone="9000000000",
            address="12 MG Road",
            city="Patna",
            state="Bihar",
            country="India",
            dob=date(1995, 5, 17),
            password=generate_password_hash("secret-pass"),
            salary_amount=None,
        )
        fields.update(overrides)
        emp = Employee(**fields)
        db.add(emp)
        db.commit()
        db.refresh(emp)
        return emp

    return _make


@pytest.fixture
def admin(db):
    row = Admin(username="root", password=generate_password_hash("admin-pass"))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def admin_headers(admin):
    token = create_access_token({"id": admin.id, "username": admin.username, "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


def employee_headers(emp):
    token = create_access_token({"id": emp.id, "email": emp.email, "role": "employee"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_auth():
    return employee_headers
