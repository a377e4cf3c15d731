import logging
from collections.abc import Mapping

from votigo.models.category import effective_max_rank
from votigo.services import storage
from votigo.services.errors import BallotValidationError

logger = logging.getLogger(__name__)


def normalize_nickname(raw_nickname):
    nickname = (raw_nickname or "").strip()
    if not nickname:
        raise BallotValidationError("Please enter a nickname")
    return nickname.lower()


def _is_blank(value):
    return value is None or str(value).strip() == ""


def _as_values(raw_selections):
    if raw_selections is None:
        return []
    if isinstance(raw_selections, (str, int)):
        return [raw_selections]
    return list(raw_selections)


def _parse_option_id(value, valid_option_ids):
    try:
        option_id = int(str(value).strip())
    except ValueError:
        raise BallotValidationError("Invalid choice") from None
    if option_id not in valid_option_ids:
        raise BallotValidationError("Invalid choice")
    return option_id


def _collect_ranked(raw_selections, max_rank, valid_option_ids):
    if not isinstance(raw_selections, Mapping):
        raise BallotValidationError("Invalid choice")

    selections = []
    seen = set()
    for position in range(1, max_rank + 1):
        value = raw_selections.get(position, raw_selections.get(str(position)))
        if _is_blank(value):
            continue
        option_id = _parse_option_id(value, valid_option_ids)
        if option_id in seen:
            raise BallotValidationError("Each choice must be different")
        seen.add(option_id)
        selections.append((option_id, position))

    if not selections:
        raise BallotValidationError("Please make at least one selection")
    return selections


def collect_selections(category, raw_selections, valid_option_ids):
    """Turn raw form input into ``(option_id, rank)`` pairs for ``category``.

    ``single`` and ``approval`` take a sequence of option ids. ``ranked`` takes
    a mapping of rank position to option id; positions past the category's
    effective max rank are ignored and blank positions are skipped.
    """
    if category.vote_type == "ranked":
        return _collect_ranked(raw_selections, effective_max_rank(category), valid_option_ids)

    values = [value for value in _as_values(raw_selections) if not _is_blank(value)]
    if category.vote_type == "single":
        if not values:
            raise BallotValidationError("Please make a selection")
        if len(values) > 1:
            raise BallotValidationError("Please choose only one option")
    elif not values:
        raise BallotValidationError("Please make at least one selection")

    # Approval duplicates are kept exactly as submitted.
    return [(_parse_option_id(value, valid_option_ids), None) for value in values]


def submit_ballot(session, category_id, nickname, selections):
    category = storage.get_category(session, category_id)
    if category.status != "open":
        raise BallotValidationError("Voting is not open for this category")

    nickname = normalize_nickname(nickname)
    valid_option_ids = {option.id for option in storage.list_options(session, category.id)}
    pairs = collect_selections(category, selections, valid_option_ids)

    vote = storage.record_ballot(session, category.id, nickname, pairs)
    logger.info(
        "Recorded ballot for %s in category %s (%d selections)",
        nickname,
        category_id,
        len(pairs),
    )
    return vote
