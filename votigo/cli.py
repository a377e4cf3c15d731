import click
from flask.cli import AppGroup, with_appcontext
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from votigo.extensions import db
from votigo.models.category import DEFAULT_MAX_RANK, SHOW_RESULTS, VOTE_TYPES
from votigo.services import categories as category_service
from votigo.services import storage
from votigo.services.errors import VotingError
from votigo.services.lifecycle import transition_category
from votigo.services.voting import tally_category

category_cli = AppGroup("category", help="Manage voting categories.")
option_cli = AppGroup("option", help="Manage category options.")
console = Console()


def show_table(columns, rows):
    table = Table(show_lines=False)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(escape(str(value)) for value in row))
    console.print(table)


@category_cli.command("list")
def category_list():
    """List all categories."""
    categories = storage.list_categories(db.session)
    if not categories:
        click.echo("No categories found.")
        return

    show_table(
        ("ID", "NAME", "TYPE", "STATUS", "RESULTS"),
        [
            (category.id, category.name, category.vote_type, category.status, category.show_results)
            for category in categories
        ],
    )


@category_cli.command("create")
@click.argument("name")
@click.option("--type", "vote_type", type=click.Choice(VOTE_TYPES), default="single", show_default=True)
@click.option("--max-rank", type=int, default=DEFAULT_MAX_RANK, show_default=True, help="Only used for ranked voting.")
@click.option("--show-results", type=click.Choice(SHOW_RESULTS), default="after_close", show_default=True)
def category_create(name, vote_type, max_rank, show_results):
    """Create a new category in draft."""
    try:
        category = category_service.create_category(
            db.session,
            name=name,
            vote_type=vote_type,
            show_results=show_results,
            max_rank=max_rank,
        )
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc

    click.echo(f"Created category #{category.id}: {category.name} ({category.vote_type})")


@category_cli.command("delete")
@click.argument("category_id", type=int)
def category_delete(category_id):
    """Delete a category with all of its options and ballots."""
    try:
        category_service.delete_category(db.session, category_id)
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc

    click.echo(f"Deleted category #{category_id}")


@option_cli.command("add")
@click.argument("category_id", type=int)
@click.argument("name")
def option_add(category_id, name):
    """Add an option to a category."""
    try:
        option = category_service.add_option(db.session, category_id, name)
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc

    click.echo(f"Added option #{option.id} to {option.category.name}: {option.name}")


@option_cli.command("list")
@click.argument("category_id", type=int)
def option_list(category_id):
    """List the options of a category."""
    try:
        category = storage.get_category(db.session, category_id)
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc

    click.echo(f"Options for: {category.name}")
    options = storage.list_options(db.session, category.id)
    if not options:
        click.echo("No options yet.")
        return

    show_table(("ID", "NAME"), [(option.id, option.name) for option in options])


@option_cli.command("remove")
@click.argument("option_id", type=int)
def option_remove(option_id):
    """Remove an option."""
    try:
        name = storage.get_option(db.session, option_id).name
        category_service.remove_option(db.session, option_id)
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc

    click.echo(f"Removed option: {name}")


def lifecycle_command(action, message, help_text):
    @click.command(action, help=help_text)
    @click.argument("category_id", type=int)
    @with_appcontext
    def command(category_id):
        try:
            category = transition_category(db.session, category_id, action)
        except VotingError as exc:
            raise click.ClickException(exc.message) from exc

        click.echo(f"{message}: {category.name}")

    return command


@click.command("results")
@click.argument("category_id", type=int)
@click.option("--show-voters", is_flag=True, help="Also list voter nicknames.")
@with_appcontext
def results_command(category_id, show_voters):
    """Show results for a category, whatever its visibility setting."""
    try:
        category = storage.get_category(db.session, category_id)
    except VotingError as exc:
        raise click.ClickException(exc.message) from exc

    tally = tally_category(db.session, category, include_voters=show_voters)
    click.echo(f"Results for: {category.name} ({tally['voter_count']} votes)")

    if tally["vote_type"] == "ranked":
        show_table(
            ("RANK", "OPTION", "POINTS", "1ST PLACE"),
            [
                (position, row.name, row.points, row.first_place_votes)
                for position, row in enumerate(tally["results"], start=1)
            ],
        )
    else:
        show_table(
            ("RANK", "OPTION", "VOTES"),
            [
                (position, row.name, row.votes)
                for position, row in enumerate(tally["results"], start=1)
            ],
        )

    if show_voters:
        click.echo("Voters:")
        for nickname in tally["voters"]:
            click.echo(f"  - {nickname}")


def register_cli(app):
    app.cli.add_command(category_cli)
    app.cli.add_command(option_cli)
    app.cli.add_command(lifecycle_command("open", "Opened voting for", "Open voting for a category."))
    app.cli.add_command(lifecycle_command("close", "Closed voting for", "Close voting for a category."))
    app.cli.add_command(lifecycle_command("reopen", "Reopened voting for", "Reopen a closed category."))
    app.cli.add_command(lifecycle_command("archive", "Archived", "Hide a closed category from listings."))
    app.cli.add_command(results_command)
