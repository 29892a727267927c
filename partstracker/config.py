import os

from sqlalchemy.engine import URL


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(',') if item.strip())


def database_uri():
    if os.environ.get('DATABASE_URL'):
        return os.environ['DATABASE_URL']

    # Connection parameters supplied one by one (host, port, user, password, database)
    if os.environ.get('DB_HOST'):
        return URL.create(
            drivername=os.environ.get('DB_DRIVER') or 'mysql+pymysql',
            username=os.environ.get('DB_USER'),
            password=os.environ.get('DB_PASSWORD'),
            host=os.environ['DB_HOST'],
            port=int(os.environ['DB_PORT']) if os.environ.get('DB_PORT') else None,
            database=os.environ.get('DB_NAME') or 'carPart_db',
        ).render_as_string(hide_password=False)

    return 'sqlite:///partstracker.db'


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'TEST_KEY_SECRET_EXAMPLE'
    SQLALCHEMY_DATABASE_URI = database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    RESET_DATABASE = _env_flag('RESET_DATABASE')

    # Session settings
    SESSION_TTL_MINUTES = int(os.environ.get('SESSION_TTL_MINUTES') or 2)
    AUTH_COOKIE_NAME = os.environ.get('AUTH_COOKIE_NAME') or 'sessionId'

    # Usernames that are registered as admins, everyone else is a guest
    ADMIN_USERNAMES = _env_list('ADMIN_USERNAMES', ('Braeden', 'Jayden', 'Joseph'))

    # Language settings
    DEFAULT_LANGUAGE = os.environ.get('DEFAULT_LANGUAGE') or 'en'
    SUPPORTED_LANGUAGES = ('en', 'fr')

    # Logging settings
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_JSON = _env_flag('LOG_JSON')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False
    LOG_JSON = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    RESET_DATABASE = False
    ADMIN_USERNAMES = ('Braeden', 'Jayden', 'Joseph')
    SESSION_TTL_MINUTES = 2
    LOG_LEVEL = 'WARNING'
