# hrdesk/utils/upsert.py
from typing import Any, Dict

from sqlalchemy import inspect
from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.orm import Session


def upsert_row(db: Session, model, values: Dict[str, Any], update: Dict[str, Any]) -> None:
    """
    Insert a row or update it in place when the primary key already exists,
    as a single statement. Commits the session.
    """
    dialect = db.get_bind().dialect.name

    if dialect == "mysql":
        stmt = mysql.insert(model).values(**values).on_duplicate_key_update(**update)
    elif dialect == "sqlite":
        keys = [col.name for col in inspect(model).primary_key]
        stmt = sqlite.insert(model).values(**values).on_conflict_do_update(index_elements=keys, set_=update)
    else:
        raise RuntimeError(f"Unsupported database dialect for upsert: {dialect}")

    db.execute(stmt)
    db.commit()
