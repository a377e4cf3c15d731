from flask import render_template, request
from sqlalchemy.exc import SQLAlchemyError

from votigo.extensions import db
from votigo.routes.admin import register_admin_routes
from votigo.routes.public import register_public_routes
from votigo.services.errors import NotFoundError, StorageError


def register_error_handlers(app):
    @app.errorhandler(NotFoundError)
    def handle_not_found(error):
        if request.headers.get("X-Requested-With") == "XMLHttpRequest":
            return {"ok": False, "error": error.message}, 404
        return render_template("error.html", message=error.message), 404

    @app.errorhandler(StorageError)
    def handle_storage_error(error):
        # Already rolled back and logged by the storage layer.
        if request.headers.get("X-Requested-With") == "XMLHttpRequest":
            return {"ok": False, "error": StorageError.message}, 500
        return render_template("error.html", message=StorageError.message), 500

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        app.logger.exception("Database error while handling %s", request.path)
        if request.headers.get("X-Requested-With") == "XMLHttpRequest":
            return {"ok": False, "error": StorageError.message}, 500
        return render_template("error.html", message=StorageError.message), 500


def register_routes(app):
    register_error_handlers(app)
    register_public_routes(app)
    register_admin_routes(app)
