from votigo.models.category import Category
from votigo.models.option import Option
from votigo.models.vote import Vote
from votigo.models.vote_selection import VoteSelection

__all__ = [
    "Category",
    "Option",
    "Vote",
    "VoteSelection",
]
