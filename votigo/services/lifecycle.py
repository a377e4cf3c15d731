"""Category lifecycle.

draft -> open -> closed -> archived, with closed -> open allowed again as
"reopen". Anything else is refused without touching the stored status.
"""

import logging

from votigo.services import storage
from votigo.services.errors import InvalidTransitionError, NeedsOptionsError

logger = logging.getLogger(__name__)

# action -> (statuses it is legal from, resulting status)
TRANSITIONS = {
    "open": (("draft", "closed"), "open"),
    "close": (("open",), "closed"),
    "reopen": (("closed",), "open"),
    "archive": (("closed",), "archived"),
}

REQUIRES_OPTIONS = ("open", "reopen")


def results_visible(status, show_results):
    if show_results == "live":
        return status in ("open", "closed", "archived")
    return status in ("closed", "archived")


def transition_category(session, category_id, action):
    if action not in TRANSITIONS:
        raise InvalidTransitionError(f"Unknown action: {action}")

    category = storage.get_category(session, category_id)
    allowed_from, target = TRANSITIONS[action]

    if category.status not in allowed_from:
        raise InvalidTransitionError(
            f"Cannot {action} a category that is {category.status}"
        )
    if action in REQUIRES_OPTIONS and storage.count_options(session, category.id) == 0:
        raise NeedsOptionsError()

    previous = category.status
    storage.set_category_status(session, category, target)
    logger.info("Category %s moved from %s to %s", category.id, previous, target)
    return category


def open_category(session, category_id):
    return transition_category(session, category_id, "open")


def close_category(session, category_id):
    return transition_category(session, category_id, "close")


def reopen_category(session, category_id):
    return transition_category(session, category_id, "reopen")


def archive_category(session, category_id):
    return transition_category(session, category_id, "archive")
