from votigo.services.voting.ranked import tally_ranked
from votigo.services.voting.results import tally_category, visible_results
from votigo.services.voting.simple import tally_simple

__all__ = [
    "tally_category",
    "tally_ranked",
    "tally_simple",
    "visible_results",
]
