# hrdesk/create_admin.py
"""Create an admin account (there is no HTTP endpoint for this)."""
import argparse
import getpass
import sys

from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash

from hrdesk.database import SessionLocal, init_db
from hrdesk.employees.models import Admin


def create_admin(username: str, password: str) -> int:
    init_db()
    db = SessionLocal()
    try:
        admin = Admin(username=username, password=generate_password_hash(password))
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin.id
    except IntegrityError:
        db.rollback()
        raise ValueError(f"Admin '{username}' already exists")
    finally:
        db.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create an hrdesk admin account.")
    parser.add_argument("--username", required=True, help="Login name of the new admin.")
    parser.add_argument("--password", help="Password (prompted for when omitted).")
    args = parser.parse_args(argv)

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 2

    try:
        admin_id = create_admin(args.username.strip(), password)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1

    print(f"Created admin '{args.username}' (id={admin_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
