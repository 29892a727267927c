"""Authentication gate: session token -> identity, identity -> role."""

import datetime
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, request

from .extensions import session_store
from .i18n import get_language, translate
from .models import RoleId
from .services import projects as projects_service
from .services.users import find_role
from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    username: str
    session_id: str
    expires_at: datetime.datetime


def authenticate(token, store=None) -> Optional[Identity]:
    """Resolves a session token to an Identity; None means anonymous.

    Never raises. The only side effect is evicting an expired session.
    """
    if store is None:
        store = session_store
    if not token:
        return None

    session = store.lookup(token)
    if session is None:
        return None

    if store.is_expired(session):
        store.delete(token)
        logger.info("Session expired", username=session.username)
        return None

    return Identity(username=session.username, session_id=session.session_id, expires_at=session.expires_at)


def determine_role(identity: Optional[Identity]) -> RoleId:
    """Anonymous callers and anything that is not an admin role are guests."""
    if identity is None:
        return RoleId.GUEST

    return RoleId.ADMIN if find_role(identity.username) == RoleId.ADMIN.value else RoleId.GUEST


def current_identity() -> Optional[Identity]:
    """The caller's identity, resolved once per request."""
    if 'identity' not in g:
        token = request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])
        g.identity = authenticate(token)
    return g.identity


def forget_identity():
    # The app context, and with it g, can outlive a single request
    g.pop('identity', None)


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_identity() is None:
            return jsonify({'error': 'unauthorized', 'message': translate('login_required', get_language())}), 401
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        identity = current_identity()
        if identity is None:
            return jsonify({'error': 'unauthorized', 'message': translate('login_required', get_language())}), 401

        if determine_role(identity) is not RoleId.ADMIN:
            logger.warning("Admin access denied", username=identity.username, path=request.path)
            return jsonify({'error': 'forbidden', 'message': translate('admin_required', get_language())}), 403

        return f(*args, **kwargs)

    return decorated_function


def project_member_required(f):
    """Only users linked to the project through UserProject may touch it."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        lang = get_language()
        identity = current_identity()
        if identity is None:
            return jsonify({'error': 'unauthorized', 'message': translate('login_required', lang)}), 401

        project_id = kwargs.get('project_id')
        if not projects_service.project_exists(project_id):
            return jsonify({
                'error': 'not_found',
                'message': translate('project_not_found', lang, project_id=project_id),
            }), 404

        if not projects_service.is_member(project_id, identity.username):
            logger.warning("Project access denied", username=identity.username, project_id=project_id)
            return jsonify({'error': 'forbidden', 'message': translate('project_member_required', lang)}), 403

        return f(*args, **kwargs)

    return decorated_function
