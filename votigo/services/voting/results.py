from votigo.services import storage
from votigo.services.lifecycle import results_visible
from votigo.services.voting.ranked import tally_ranked
from votigo.services.voting.simple import tally_simple


def tally_category(session, category, include_voters=False):
    if category.vote_type == "ranked":
        tally = tally_ranked(session, category)
    else:
        tally = tally_simple(session, category)

    if include_voters:
        tally["voters"] = storage.list_voters(session, category.id)
    return tally


def visible_results(session, category_id):
    """Return ``(category, tally)``; ``tally`` is None while results are hidden."""
    category = storage.get_category(session, category_id)
    if not results_visible(category.status, category.show_results):
        return category, None
    return category, tally_category(session, category)
