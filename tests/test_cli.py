import re

from votigo.models import Category, Option
from votigo.services.ballot import submit_ballot


def table_rows(output):
    return [
        [cell.strip() for cell in re.split(r"[│|]", line) if cell.strip()]
        for line in output.splitlines()
        if re.search(r"[│|]", line)
    ]


def test_category_create_and_list(cli_runner, db_session):
    result = cli_runner.invoke(args=["category", "create", "Best Costume"])

    assert result.exit_code == 0
    assert "Created category #1: Best Costume (single)" in result.output
    assert db_session.query(Category).one().status == "draft"

    result = cli_runner.invoke(args=["category", "list"])
    assert ["ID", "NAME", "TYPE", "STATUS", "RESULTS"] in table_rows(result.output)
    assert ["1", "Best Costume", "single", "draft", "after_close"] in table_rows(result.output)


def test_category_list_when_empty(cli_runner):
    result = cli_runner.invoke(args=["category", "list"])

    assert "No categories found." in result.output


def test_ranked_category_gets_max_rank(cli_runner, db_session):
    cli_runner.invoke(args=["category", "create", "Top Game", "--type", "ranked", "--max-rank", "5"])

    assert db_session.query(Category).one().max_rank == 5


def test_option_commands(cli_runner, db_session, make_category):
    category, _ = make_category(options=())

    result = cli_runner.invoke(args=["option", "add", str(category.id), "Pirate"])
    assert result.exit_code == 0
    assert "Added option" in result.output

    result = cli_runner.invoke(args=["option", "list", str(category.id)])
    assert "Pirate" in result.output

    option = db_session.query(Option).one()
    result = cli_runner.invoke(args=["option", "remove", str(option.id)])
    assert "Removed option: Pirate" in result.output
    assert db_session.query(Option).count() == 0


def test_open_without_options_fails(cli_runner, db_session, make_category):
    category, _ = make_category(options=())

    result = cli_runner.invoke(args=["open", str(category.id)])

    assert result.exit_code == 1
    assert "add at least one option first" in result.output
    assert db_session.get(Category, category.id).status == "draft"


def test_open_close_and_results(cli_runner, db_session, make_category):
    category, (a, _) = make_category(name="Best Costume")

    result = cli_runner.invoke(args=["open", str(category.id)])
    assert "Opened voting for: Best Costume" in result.output

    submit_ballot(db_session, category.id, "Zoe", [a.id])

    result = cli_runner.invoke(args=["close", str(category.id)])
    assert "Closed voting for: Best Costume" in result.output

    result = cli_runner.invoke(args=["results", str(category.id), "--show-voters"])
    assert result.exit_code == 0
    assert "Results for: Best Costume (1 votes)" in result.output
    assert ["1", "A", "1"] in table_rows(result.output)
    assert ["2", "B", "0"] in table_rows(result.output)
    assert "  - zoe" in result.output


def test_ranked_results_table(cli_runner, db_session, make_category):
    category, (x, y, _) = make_category(vote_type="ranked", options=("X", "Y", "Z"), status="open", max_rank=3)
    submit_ballot(db_session, category.id, "zoe", {1: x.id, 2: y.id})

    result = cli_runner.invoke(args=["results", str(category.id)])

    assert ["RANK", "OPTION", "POINTS", "1ST PLACE"] in table_rows(result.output)
    assert ["1", "X", "3", "1"] in table_rows(result.output)


def test_missing_category(cli_runner):
    result = cli_runner.invoke(args=["close", "77"])

    assert result.exit_code == 1
    assert "Category not found" in result.output
