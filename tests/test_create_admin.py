import pytest
from werkzeug.security import check_password_hash

from hrdesk.create_admin import create_admin, main
from hrdesk.employees.models import Admin


def test_create_admin_hashes_password(db):
    admin_id = create_admin("ops", "s3cret")

    row = db.get(Admin, admin_id)
    assert row.username == "ops"
    assert check_password_hash(row.password, "s3cret")


def test_created_admin_can_log_in(client):
    create_admin("ops", "s3cret")

    r = client.post("/api/login", json={"username": "ops", "password": "s3cret"})

    assert r.status_code == 200


def test_duplicate_username_is_refused(db):
    create_admin("ops", "one")

    with pytest.raises(ValueError, match="already exists"):
        create_admin("ops", "two")


def test_cli_exit_codes(db, capsys):
    assert main(["--username", "ops", "--password", "pw"]) == 0
    assert "Created admin 'ops'" in capsys.readouterr().out

    assert main(["--username", "ops", "--password", "pw"]) == 1
    assert "already exists" in capsys.readouterr().err


def test_cli_rejects_empty_password(db, monkeypatch):
    monkeypatch.setattr("getpass.getpass", lambda prompt="": "")

    assert main(["--username", "ops"]) == 2
