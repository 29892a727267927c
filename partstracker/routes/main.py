from flask import Blueprint, current_app, jsonify, make_response, request

from partstracker.auth import current_identity, determine_role
from partstracker.i18n import LANGUAGE_COOKIE, build_view, get_language

main_bp = Blueprint('main', __name__)


def request_data():
    """JSON object body or submitted form, whichever the client sent."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


@main_bp.route("/", methods=["GET"])
def index():
    identity = current_identity()
    lang = get_language()
    return jsonify(build_view(
        lang,
        {
            'logged_in_user': identity.username if identity else None,
            'role': determine_role(identity).name.lower(),
        },
        'home_title',
    ))


@main_bp.route("/about", methods=["GET"])
def about():
    return jsonify(build_view(get_language(), message_key='about'))


@main_bp.route("/language", methods=["POST"])
def set_language():
    lang = request_data().get('language')
    if lang not in current_app.config['SUPPORTED_LANGUAGES']:
        lang = get_language()

    response = make_response(jsonify(build_view(lang, message_key='language_set')))
    response.set_cookie(LANGUAGE_COOKIE, lang)
    return response
