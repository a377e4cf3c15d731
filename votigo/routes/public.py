from flask import render_template, request

from votigo.extensions import db
from votigo.models.category import effective_max_rank
from votigo.services import storage
from votigo.services.ballot import submit_ballot
from votigo.services.errors import BallotValidationError
from votigo.services.lifecycle import results_visible
from votigo.services.voting import visible_results


def register_public_routes(app):
    @app.route("/")
    def index():
        categories = storage.list_open_categories(db.session)
        return render_template("index.html", categories=categories)

    @app.route("/vote/<int:category_id>", methods=["GET", "POST"])
    def vote(category_id):
        category = storage.get_category(db.session, category_id)

        if category.status != "open":
            if request.headers.get("X-Requested-With") == "XMLHttpRequest":
                return {"ok": False, "error": "Voting is not open for this category"}, 409
            return (
                render_template("error.html", message="Voting is not open for this category"),
                409,
            )

        options = storage.list_options(db.session, category.id)
        max_rank = effective_max_rank(category)
        ranks = list(range(1, max_rank + 1)) if category.vote_type == "ranked" else []

        if request.method == "GET":
            return render_template(
                "vote.html",
                category=category,
                options=options,
                ranks=ranks,
                nickname="",
                error=None,
                success=None,
            )

        nickname = request.form.get("nickname")
        if category.vote_type == "ranked":
            selections = {position: request.form.get(f"rank{position}") for position in ranks}
        else:
            selections = request.form.getlist("choice")

        try:
            ballot = submit_ballot(db.session, category.id, nickname, selections)
        except BallotValidationError as exc:
            if request.headers.get("X-Requested-With") == "XMLHttpRequest":
                return {"ok": False, "error": exc.message}, 400
            return (
                render_template(
                    "vote.html",
                    category=category,
                    options=options,
                    ranks=ranks,
                    nickname=(nickname or "").strip(),
                    error=exc.message,
                    success=None,
                ),
                400,
            )

        message = f"Vote recorded! Thank you, {ballot.nickname}"
        if request.headers.get("X-Requested-With") == "XMLHttpRequest":
            return {"ok": True, "message": message, "nickname": ballot.nickname}

        return render_template(
            "vote.html",
            category=category,
            options=options,
            ranks=ranks,
            nickname="",
            error=None,
            success=message,
        )

    @app.route("/results")
    def results_list():
        categories = [
            category
            for category in storage.list_active_categories(db.session)
            if results_visible(category.status, category.show_results)
        ]
        return render_template("results_list.html", categories=categories)

    @app.route("/results/<int:category_id>")
    def results(category_id):
        category, tally = visible_results(db.session, category_id)
        return render_template(
            "results.html",
            category=category,
            tally=tally,
            not_visible=tally is None,
        )

    @app.route("/results/<int:category_id>/table")
    def results_table(category_id):
        # Fragment polled by the results page of live categories.
        category, tally = visible_results(db.session, category_id)
        return render_template(
            "_results_body.html",
            category=category,
            tally=tally,
            not_visible=tally is None,
        )
