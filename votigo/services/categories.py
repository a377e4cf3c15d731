import logging

from votigo.models.category import DEFAULT_MAX_RANK, SHOW_RESULTS, VOTE_TYPES
from votigo.services import storage
from votigo.services.errors import ValidationError

logger = logging.getLogger(__name__)


def normalize_max_rank(vote_type, raw_max_rank):
    """max_rank is only stored for ranked categories; bad or missing input means the default."""
    if vote_type != "ranked":
        return None
    try:
        max_rank = int(raw_max_rank)
    except (TypeError, ValueError):
        return DEFAULT_MAX_RANK
    return max_rank if max_rank >= 1 else DEFAULT_MAX_RANK


def _clean_category_fields(name, vote_type, show_results, max_rank):
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if vote_type not in VOTE_TYPES:
        raise ValidationError("Invalid vote type")
    if show_results not in SHOW_RESULTS:
        raise ValidationError("Invalid results visibility")
    return {
        "name": name,
        "vote_type": vote_type,
        "show_results": show_results,
        "max_rank": normalize_max_rank(vote_type, max_rank),
    }


def create_category(session, name, vote_type="single", show_results="after_close", max_rank=None):
    fields = _clean_category_fields(name, vote_type, show_results, max_rank)
    category = storage.create_category(session, status="draft", **fields)
    logger.info("Created category %s (%s)", category.id, category.vote_type)
    return category


def edit_category(session, category_id, name, vote_type, show_results, max_rank=None):
    category = storage.get_category(session, category_id)
    fields = _clean_category_fields(name, vote_type, show_results, max_rank)
    return storage.update_category(session, category, **fields)


def delete_category(session, category_id):
    category = storage.get_category(session, category_id)
    storage.delete_category(session, category)
    logger.info("Deleted category %s with its options and ballots", category_id)


def add_option(session, category_id, name):
    category = storage.get_category(session, category_id)
    name = (name or "").strip()
    if not name:
        raise ValidationError("Option name is required")
    return storage.create_option(session, category.id, name)


def remove_option(session, option_id):
    """Delete an option and return the id of the category it belonged to."""
    option = storage.get_option(session, option_id)
    category_id = option.category_id
    storage.delete_option(session, option)
    return category_id
