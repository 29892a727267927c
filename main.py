import os

from partstracker import create_app

app = create_app(os.environ.get('PARTSTRACKER_CONFIG') or 'partstracker.config.DevelopmentConfig')


if __name__ == "__main__":
    app.run(
        host=os.environ.get('HOST') or '127.0.0.1',
        port=int(os.environ.get('PORT') or 1339),
    )
