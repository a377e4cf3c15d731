from flask import Flask

from votigo.cli import register_cli
from votigo.config import Config
from votigo.extensions import db, login_manager, migrate
from votigo.routes import register_routes
from votigo.services.security import load_admin_from_request, unauthorized_response


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])
    if not app.config["ADMIN_PASSWORD"]:
        app.logger.warning("ADMIN_PASSWORD is not set; the admin pages will refuse every login")

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.request_loader(load_admin_from_request)
    login_manager.unauthorized_handler(unauthorized_response)

    register_routes(app)
    register_cli(app)
    return app


app = create_app()

__all__ = ["app", "db", "migrate", "create_app"]
