from flask import Blueprint, current_app, jsonify, make_response

from partstracker.auth import admin_required, current_identity, login_required
from partstracker.extensions import session_store
from partstracker.i18n import build_view, get_language
from partstracker.routes.main import request_data
from partstracker.services import users as users_service
from partstracker.utils.logging import get_logger

logger = get_logger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/users/signup", methods=["POST"])
def signup():
    data = request_data()
    username = data.get("username")

    user = users_service.register(username, data.get("password"), data.get("confirmPassword"))

    response = make_response(jsonify(build_view(
        get_language(), user, 'signup_success', username=user['username']
    )), 201)
    response.set_cookie("username", user['username'])
    return response


@auth_bp.route("/users/login", methods=["POST"])
def login():
    data = request_data()
    username = data.get("username")
    lang = get_language()

    if not users_service.validate_login(username, data.get("password")):
        logger.info("Login rejected", username=username)
        return jsonify({'error': 'unauthorized', **build_view(lang, message_key='login_failed')}), 401

    session_id = session_store.create(username, current_app.config['SESSION_TTL_MINUTES'])
    session = session_store.lookup(session_id)
    role = users_service.get_role(username)

    response = make_response(jsonify(build_view(
        lang,
        {'username': username, 'role_id': role, 'expires_at': session.expires_at.isoformat()},
        'login_success',
        username=username,
    )))
    response.set_cookie(
        current_app.config['AUTH_COOKIE_NAME'], session_id,
        expires=session.expires_at, httponly=True, samesite='Lax',
    )
    response.set_cookie("userRole", str(role))
    response.set_cookie("username", username)

    logger.info("Logged in", username=username)
    return response


@auth_bp.route("/users/logout", methods=["GET", "POST"], endpoint='logout')
@login_required
def logout():
    identity = current_identity()
    session_store.delete(identity.session_id)

    response = make_response(jsonify(build_view(
        get_language(), message_key='logout_success', username=identity.username
    )))
    # Erase the cookie by forcing it to expire
    response.set_cookie(current_app.config['AUTH_COOKIE_NAME'], "", expires=0)

    logger.info("Logged out", username=identity.username)
    return response


@auth_bp.route("/users", methods=["GET"])
@admin_required
def list_users():
    return jsonify(build_view(get_language(), users_service.list_users(), 'users_listed'))
