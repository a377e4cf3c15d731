import pytest

from votigo.models import Vote, VoteSelection
from votigo.services.ballot import normalize_nickname, submit_ballot
from votigo.services.errors import BallotValidationError, NotFoundError


def selections_for(db_session, category_id, nickname):
    vote = db_session.query(Vote).filter_by(category_id=category_id, nickname=nickname).one()
    return [
        (selection.option_id, selection.rank)
        for selection in db_session.query(VoteSelection)
        .filter_by(vote_id=vote.id)
        .order_by(VoteSelection.id)
    ]


def test_normalize_nickname_trims_and_lowercases():
    assert normalize_nickname("  Zoe \n") == "zoe"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_empty_nickname_is_rejected(raw):
    with pytest.raises(BallotValidationError) as excinfo:
        normalize_nickname(raw)
    assert excinfo.value.message == "Please enter a nickname"


@pytest.mark.parametrize("status", ["draft", "closed", "archived"])
def test_ballot_rejected_unless_open(db_session, make_category, status):
    category, (option_a, _) = make_category(status=status)

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", [option_a.id])

    assert excinfo.value.message == "Voting is not open for this category"
    assert db_session.query(Vote).count() == 0


def test_unknown_category(db_session):
    with pytest.raises(NotFoundError):
        submit_ballot(db_session, 999, "zoe", ["1"])


def test_single_records_one_selection(db_session, make_category):
    category, (option_a, _) = make_category(status="open")

    vote = submit_ballot(db_session, category.id, "Zoe", [str(option_a.id)])

    assert vote.nickname == "zoe"
    assert selections_for(db_session, category.id, "zoe") == [(option_a.id, None)]


def test_single_requires_a_selection(db_session, make_category):
    category, _ = make_category(status="open")

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", [""])

    assert excinfo.value.message == "Please make a selection"
    assert db_session.query(Vote).count() == 0


def test_single_rejects_more_than_one_selection(db_session, make_category):
    category, (option_a, option_b) = make_category(status="open")

    with pytest.raises(BallotValidationError):
        submit_ballot(db_session, category.id, "zoe", [option_a.id, option_b.id])


@pytest.mark.parametrize("vote_type", ["single", "approval"])
def test_option_from_another_category_is_rejected(db_session, make_category, vote_type):
    category, _ = make_category(vote_type=vote_type, status="open")
    _, (foreign, _) = make_category(name="Other", status="open")

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", [foreign.id])

    assert excinfo.value.message == "Invalid choice"
    assert db_session.query(Vote).count() == 0


def test_non_numeric_choice_is_rejected(db_session, make_category):
    category, _ = make_category(status="open")

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", ["abc"])

    assert excinfo.value.message == "Invalid choice"


def test_approval_records_every_choice_including_duplicates(db_session, make_category):
    category, (option_a, option_b) = make_category(vote_type="approval", status="open")

    submit_ballot(db_session, category.id, "zoe", [option_a.id, option_b.id, option_a.id])

    assert selections_for(db_session, category.id, "zoe") == [
        (option_a.id, None),
        (option_b.id, None),
        (option_a.id, None),
    ]


def test_approval_requires_at_least_one_choice(db_session, make_category):
    category, _ = make_category(vote_type="approval", status="open")

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", [])

    assert excinfo.value.message == "Please make at least one selection"


def test_ranked_collects_filled_positions(db_session, make_category):
    category, (x, y, z) = make_category(
        vote_type="ranked", options=("X", "Y", "Z"), status="open", max_rank=3
    )

    submit_ballot(db_session, category.id, "zoe", {1: str(x.id), 2: "", 3: str(z.id)})

    assert selections_for(db_session, category.id, "zoe") == [(x.id, 1), (z.id, 3)]


def test_ranked_accepts_string_positions(db_session, make_category):
    category, (x, y, _) = make_category(vote_type="ranked", options=("X", "Y", "Z"), status="open")

    submit_ballot(db_session, category.id, "zoe", {"1": y.id, "2": x.id})

    assert selections_for(db_session, category.id, "zoe") == [(y.id, 1), (x.id, 2)]


def test_ranked_ignores_positions_past_max_rank(db_session, make_category):
    category, (x, y, z) = make_category(
        vote_type="ranked", options=("X", "Y", "Z"), status="open", max_rank=2
    )

    submit_ballot(db_session, category.id, "zoe", {1: x.id, 2: y.id, 3: z.id})

    assert selections_for(db_session, category.id, "zoe") == [(x.id, 1), (y.id, 2)]


def test_ranked_rejects_repeated_choice(db_session, make_category):
    category, (x, _, _) = make_category(vote_type="ranked", options=("X", "Y", "Z"), status="open")

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", {1: x.id, 2: x.id})

    assert excinfo.value.message == "Each choice must be different"
    assert db_session.query(Vote).count() == 0


def test_ranked_requires_at_least_one_choice(db_session, make_category):
    category, _ = make_category(vote_type="ranked", status="open")

    with pytest.raises(BallotValidationError) as excinfo:
        submit_ballot(db_session, category.id, "zoe", {1: "", 2: None})

    assert excinfo.value.message == "Please make at least one selection"


def test_revote_replaces_selections_and_keeps_one_vote(db_session, make_category):
    category, (option_a, option_b) = make_category(vote_type="approval", status="open")

    first = submit_ballot(db_session, category.id, "Alice", [option_a.id, option_b.id])
    second = submit_ballot(db_session, category.id, "alice", [option_b.id])

    assert first.id == second.id
    assert db_session.query(Vote).filter_by(category_id=category.id).count() == 1
    assert selections_for(db_session, category.id, "alice") == [(option_b.id, None)]


def test_failed_revote_leaves_previous_ballot(db_session, make_category):
    category, (option_a, option_b) = make_category(status="open")
    submit_ballot(db_session, category.id, "zoe", [option_a.id])

    with pytest.raises(BallotValidationError):
        submit_ballot(db_session, category.id, "ZOE", [])

    assert selections_for(db_session, category.id, "zoe") == [(option_a.id, None)]


def test_same_nickname_in_different_categories_is_two_votes(db_session, make_category):
    first, (a1, _) = make_category(name="First", status="open")
    second, (a2, _) = make_category(name="Second", status="open")

    submit_ballot(db_session, first.id, "zoe", [a1.id])
    submit_ballot(db_session, second.id, "zoe", [a2.id])

    assert db_session.query(Vote).count() == 2
