from flask import abort, flash, redirect, render_template, request, url_for
from flask_login import login_required

from votigo.extensions import db
from votigo.models.category import DEFAULT_MAX_RANK, SHOW_RESULTS, VOTE_TYPES
from votigo.services import categories as category_service
from votigo.services import storage
from votigo.services.errors import InvalidTransitionError, ValidationError
from votigo.services.lifecycle import TRANSITIONS, transition_category
from votigo.services.voting import tally_category


def register_admin_routes(app):
    def render_category_page(category, error=None, status=200):
        options = storage.list_options(db.session, category.id) if category else []
        return (
            render_template(
                "admin/category.html",
                category=category,
                options=options,
                vote_types=VOTE_TYPES,
                show_results_choices=SHOW_RESULTS,
                default_max_rank=DEFAULT_MAX_RANK,
                error=error,
            ),
            status,
        )

    @app.route("/admin")
    @login_required
    def admin_dashboard():
        categories = storage.list_categories(db.session)
        return render_template("admin/dashboard.html", categories=categories)

    @app.route("/admin/category/new", methods=["GET", "POST"])
    @login_required
    def admin_category_new():
        if request.method == "GET":
            return render_category_page(None)

        try:
            category = category_service.create_category(
                db.session,
                name=request.form.get("name"),
                vote_type=request.form.get("vote_type", "single"),
                show_results=request.form.get("show_results", "after_close"),
                max_rank=request.form.get("max_rank"),
            )
        except ValidationError as exc:
            if request.headers.get("X-Requested-With") == "XMLHttpRequest":
                return {"ok": False, "error": exc.message}, 400
            return render_category_page(None, error=exc.message, status=400)

        if request.headers.get("X-Requested-With") == "XMLHttpRequest":
            return {
                "ok": True,
                "category": {
                    "id": category.id,
                    "name": category.name,
                    "vote_type": category.vote_type,
                    "status": category.status,
                    "show_results": category.show_results,
                    "max_rank": category.max_rank,
                },
            }

        flash(f"Created category: {category.name}", "success")
        return redirect(url_for("admin_category", category_id=category.id))

    @app.route("/admin/category/<int:category_id>", methods=["GET", "POST"])
    @login_required
    def admin_category(category_id):
        category = storage.get_category(db.session, category_id)

        if request.method == "GET":
            return render_category_page(category)

        try:
            category_service.edit_category(
                db.session,
                category.id,
                name=request.form.get("name"),
                vote_type=request.form.get("vote_type", category.vote_type),
                show_results=request.form.get("show_results", category.show_results),
                max_rank=request.form.get("max_rank"),
            )
        except ValidationError as exc:
            return render_category_page(category, error=exc.message, status=400)

        flash("Category updated.", "success")
        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/category/<int:category_id>/delete", methods=["POST"])
    @login_required
    def admin_category_delete(category_id):
        category_service.delete_category(db.session, category_id)
        flash("Category deleted.", "success")
        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/category/<int:category_id>/<action>", methods=["POST"])
    @login_required
    def admin_category_transition(category_id, action):
        if action not in TRANSITIONS:
            abort(404)

        try:
            category = transition_category(db.session, category_id, action)
        except InvalidTransitionError as exc:
            category = storage.get_category(db.session, category_id)
            return render_category_page(category, error=exc.message, status=409)

        flash(f"{category.name} is now {category.status}.", "success")
        return redirect(url_for("admin_dashboard"))

    @app.route("/admin/category/<int:category_id>/option/add", methods=["POST"])
    @login_required
    def admin_option_add(category_id):
        try:
            category_service.add_option(
                db.session, category_id, request.form.get("option_name")
            )
        except ValidationError as exc:
            flash(exc.message, "error")
        return redirect(url_for("admin_category", category_id=category_id))

    @app.route("/admin/option/<int:option_id>/delete", methods=["POST"])
    @login_required
    def admin_option_delete(option_id):
        category_id = category_service.remove_option(db.session, option_id)
        flash("Option removed.", "success")
        return redirect(url_for("admin_category", category_id=category_id))

    @app.route("/admin/category/<int:category_id>/results")
    @login_required
    def admin_category_results(category_id):
        category = storage.get_category(db.session, category_id)
        tally = tally_category(db.session, category, include_voters=True)
        return render_template("admin/results.html", category=category, tally=tally)
