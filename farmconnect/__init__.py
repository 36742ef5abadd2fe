import logging

from flask import Flask
from sqlalchemy import event
from sqlalchemy.engine import make_url

from farmconnect.auth import register_token_handlers
from farmconnect.config import Config
from farmconnect.errors import register_error_handlers
from farmconnect.extensions import cors, db, jwt, migrate
from farmconnect.routes import register_blueprints


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite leaves foreign keys unenforced unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_app(overrides=None):
    """Build the API. ``overrides`` wins over values read from the environment."""
    app = Flask(__name__)
    app.config.from_mapping(Config().as_dict())
    if overrides:
        app.config.from_mapping(overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # ---------------- Extensions ----------------
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    jwt.init_app(app)

    register_token_handlers(jwt)
    register_error_handlers(app)
    register_blueprints(app)

    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            event.listen(db.engine, "connect", _enable_sqlite_foreign_keys)

    uri = make_url(app.config["SQLALCHEMY_DATABASE_URI"])
    app.logger.info("SQLALCHEMY_DATABASE_URI: %s", uri.render_as_string(hide_password=True))

    if app.config["AUTO_CREATE_TABLES"]:
        with app.app_context():
            db.create_all()

    return app
