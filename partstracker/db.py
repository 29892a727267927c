"""Schema lifecycle: create, drop and reset the tables, seed the fixed roles."""

import sqlite3

from sqlalchemy import event
from sqlalchemy.engine import Engine

from .extensions import db
from .models import Role, RoleId
from .utils.logging import get_logger

logger = get_logger(__name__)

ROLE_NAMES = {
    RoleId.ADMIN: "admin",
    RoleId.GUEST: "guest",
}


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def seed_roles():
    for role_id, name in ROLE_NAMES.items():
        if db.session.get(Role, role_id.value) is None:
            db.session.add(Role(id=role_id.value, name=name))
    db.session.commit()


def create_schema():
    db.create_all()
    seed_roles()
    logger.info("Database tables created")


def drop_schema():
    db.session.remove()
    db.drop_all()
    logger.info("Database tables dropped")


def reset_schema():
    drop_schema()
    create_schema()
