from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException


def create_app(config_class='partstracker.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.url_map.strict_slashes = False

    from .utils.logging import get_logger, setup_logging
    setup_logging(app.config['LOG_LEVEL'], app.config['LOG_JSON'])
    logger = get_logger(__name__)

    # Initialize extensions
    from .extensions import db, session_store
    db.init_app(app)
    session_store.init_app(app)

    from partstracker.routes.main import main_bp
    from partstracker.routes.auth import auth_bp
    from partstracker.routes.parts import parts_bp
    from partstracker.routes.projects import projects_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(parts_bp)
    app.register_blueprint(projects_bp)

    from .auth import forget_identity
    app.before_request(forget_identity)

    register_error_handlers(app)

    # Create tables and the fixed roles
    with app.app_context():
        from .db import create_schema, reset_schema
        if app.config.get('RESET_DATABASE'):
            reset_schema()
        else:
            create_schema()

    logger.info("Application created", config=str(config_class))
    return app


def register_error_handlers(app):
    from .errors import ServiceError
    from .i18n import get_language, translate
    from .utils.logging import get_logger

    logger = get_logger(__name__)

    @app.errorhandler(ServiceError)
    def handle_service_error(e):
        lang = get_language()
        body = {
            'error': e.kind.value,
            'message': translate(f'error_{e.kind.value}', lang),
        }
        if e.is_client_error:
            body['detail'] = e.message
            logger.info("Request rejected", kind=e.kind.value, detail=e.message)
        return jsonify(body), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unexpected error")
        return jsonify({'error': 'internal', 'message': translate('error_internal', get_language())}), 500
