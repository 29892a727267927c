from flask_sqlalchemy import SQLAlchemy
from .utils.security import PasswordHasher
from .sessions import SessionStore

db = SQLAlchemy()
password_hasher = PasswordHasher()
session_store = SessionStore()
