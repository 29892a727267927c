"""User registration, credential checks and role lookup."""

from typing import Iterable, List, Optional

from flask import current_app

from partstracker.errors import ErrorKind, ServiceError, store_guard
from partstracker.extensions import db, password_hasher
from partstracker.models import Role, RoleId, User
from partstracker.utils.logging import get_logger
from partstracker.utils.security import (
    MAX_USERNAME_LENGTH,
    MIN_USERNAME_LENGTH,
    is_valid_password,
    is_valid_username,
)
from partstracker.utils.validation import parse_identifier

logger = get_logger(__name__)


class RolePolicy:
    """Maps a new username to its role: allowlisted usernames are admins."""

    def __init__(self, admin_usernames: Iterable[str] = ()):
        self.admin_usernames = frozenset(admin_usernames)

    @classmethod
    def from_config(cls, config) -> "RolePolicy":
        return cls(config.get('ADMIN_USERNAMES', ()))

    def role_for(self, username: str) -> RoleId:
        return RoleId.ADMIN if username in self.admin_usernames else RoleId.GUEST


def register(username, password, confirm_password, policy: Optional[RolePolicy] = None) -> dict:
    if password != confirm_password:
        raise ServiceError(ErrorKind.VALIDATION, "Passwords do not match.")

    if not is_valid_username(username):
        raise ServiceError(
            ErrorKind.VALIDATION,
            f"Username must be between {MIN_USERNAME_LENGTH} and {MAX_USERNAME_LENGTH} characters",
        )

    if not is_valid_password(password):
        raise ServiceError(
            ErrorKind.VALIDATION,
            "Password must be 8 or more characters and include an uppercase character, "
            "lowercase character, number and symbol.",
        )

    if user_exists(username):
        logger.info("Registration rejected, username taken", username=username)
        raise ServiceError(ErrorKind.DUPLICATE_USER, "Username already exists.")

    policy = policy or RolePolicy.from_config(current_app.config)
    role = policy.role_for(username)

    with store_guard("register"):
        user = User(
            username=username,
            password=password_hasher.hash_password(password),
            role_id=role.value,
        )
        db.session.add(user)
        db.session.commit()

    logger.info("User registered", username=username, role=role.name)
    return user.to_dict()


def validate_login(username, password) -> bool:
    if not isinstance(username, str) or not isinstance(password, str):
        return False

    with store_guard("validate_login"):
        user = User.query.filter_by(username=username).first()

    if user is None:
        return False
    return password_hasher.verify_password(user.password, password)


def find_role(username) -> Optional[int]:
    """Raw stored role id, or None for an unknown user."""
    if not isinstance(username, str):
        return None
    with store_guard("find_role"):
        return db.session.execute(
            db.select(User.role_id).where(User.username == username)
        ).scalar_one_or_none()


def get_role(username) -> int:
    role_id = find_role(username)
    if role_id is None:
        raise ServiceError(ErrorKind.NOT_FOUND, f"User '{username}' does not exist")
    return role_id


def user_exists(identifier) -> bool:
    """``identifier`` is either a user id (int) or a username (str)."""
    with store_guard("user_exists"):
        if isinstance(identifier, str):
            query = db.select(User.id).where(User.username == identifier)
        else:
            user_id = parse_identifier(identifier)
            if user_id is None:
                return False
            query = db.select(User.id).where(User.id == user_id)
        return db.session.execute(query).first() is not None


def get_user_id(username) -> Optional[int]:
    if not isinstance(username, str) or not username:
        return None
    with store_guard("get_user_id"):
        return db.session.execute(
            db.select(User.id).where(User.username == username)
        ).scalar_one_or_none()


def list_users() -> List[dict]:
    with store_guard("list_users"):
        rows = db.session.execute(
            db.select(User.username, Role.name)
            .join(Role, User.role_id == Role.id)
            .order_by(User.username)
        ).all()
    return [{"username": username, "role_name": role_name} for username, role_name in rows]
