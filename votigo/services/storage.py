"""Storage access for categories, options and ballots.

Every function takes the SQLAlchemy session it works on. Mutations commit
here and nowhere else; a failed commit is rolled back, logged and re-raised as
a :class:`~votigo.services.errors.StorageError`.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import case, func, literal
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from votigo.models import Category, Option, Vote, VoteSelection
from votigo.services.errors import ConstraintViolationError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimpleTallyRow:
    option_id: int
    name: str
    sort_order: int
    votes: int
    percent: float = 0.0


@dataclass(frozen=True)
class RankedTallyRow:
    option_id: int
    name: str
    sort_order: int
    points: int
    first_place_votes: int


@contextmanager
def transaction(session, action):
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.exception("Constraint violation while trying to %s", action)
        raise ConstraintViolationError() from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise StorageError() from exc


# Categories


def create_category(session, name, vote_type, status="draft", show_results="after_close", max_rank=None):
    category = Category(
        name=name,
        vote_type=vote_type,
        status=status,
        show_results=show_results,
        max_rank=max_rank,
    )
    with transaction(session, f"create category {name!r}"):
        session.add(category)
    return category


def get_category(session, category_id):
    category = session.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def list_categories(session):
    return (
        session.query(Category)
        .order_by(Category.created_at.desc(), Category.id.desc())
        .all()
    )


def list_open_categories(session):
    return (
        session.query(Category)
        .filter(Category.status == "open")
        .order_by(Category.created_at.desc(), Category.id.desc())
        .all()
    )


def list_active_categories(session):
    return (
        session.query(Category)
        .filter(Category.status != "archived")
        .order_by(Category.id)
        .all()
    )


def update_category(session, category, **fields):
    with transaction(session, f"update category {category.id}"):
        for key, value in fields.items():
            setattr(category, key, value)
    return category


def set_category_status(session, category, status):
    with transaction(session, f"set category {category.id} to {status}"):
        category.status = status
    return category


def delete_category(session, category):
    with transaction(session, f"delete category {category.id}"):
        session.delete(category)


# Options


def create_option(session, category_id, name):
    with transaction(session, f"add option {name!r} to category {category_id}"):
        highest = (
            session.query(func.max(Option.sort_order))
            .filter(Option.category_id == category_id)
            .scalar()
        )
        option = Option(
            category_id=category_id,
            name=name,
            sort_order=0 if highest is None else highest + 1,
        )
        session.add(option)
    return option


def get_option(session, option_id):
    option = session.get(Option, option_id)
    if option is None:
        raise NotFoundError("Option not found")
    return option


def list_options(session, category_id):
    return (
        session.query(Option)
        .filter(Option.category_id == category_id)
        .order_by(Option.sort_order, Option.id)
        .all()
    )


def count_options(session, category_id):
    return (
        session.query(func.count(Option.id))
        .filter(Option.category_id == category_id)
        .scalar()
    )


def delete_option(session, option):
    with transaction(session, f"delete option {option.id}"):
        session.delete(option)


# Ballots


def record_ballot(session, category_id, nickname, selections):
    """Upsert the vote for ``nickname`` and replace all of its selections.

    ``selections`` is a list of ``(option_id, rank)`` pairs, already validated.
    The upsert and the replacement commit together or not at all.
    """
    with transaction(session, f"record ballot for {nickname!r} in category {category_id}"):
        vote = (
            session.query(Vote)
            .filter_by(category_id=category_id, nickname=nickname)
            .one_or_none()
        )
        if vote is None:
            vote = Vote(category_id=category_id, nickname=nickname)
            session.add(vote)
        else:
            vote.created_at = func.current_timestamp()

        vote.selections = [
            VoteSelection(option_id=option_id, rank=rank) for option_id, rank in selections
        ]
    return vote


def count_votes(session, category_id):
    return (
        session.query(func.count(Vote.id))
        .filter(Vote.category_id == category_id)
        .scalar()
    )


def list_voters(session, category_id):
    rows = (
        session.query(Vote.nickname)
        .filter(Vote.category_id == category_id)
        .order_by(Vote.created_at, Vote.id)
        .all()
    )
    return [nickname for (nickname,) in rows]


# Tally aggregates


def tally_simple_rows(session, category_id):
    votes = func.count(VoteSelection.id)
    rows = (
        session.query(Option.id, Option.name, Option.sort_order, votes)
        .outerjoin(VoteSelection, VoteSelection.option_id == Option.id)
        .filter(Option.category_id == category_id)
        .group_by(Option.id, Option.name, Option.sort_order)
        .all()
    )
    return [
        SimpleTallyRow(
            option_id=option_id,
            name=name,
            sort_order=sort_order or 0,
            votes=int(count or 0),
        )
        for option_id, name, sort_order, count in rows
    ]


def tally_ranked_rows(session, category_id, max_rank):
    points = func.coalesce(func.sum(literal(max_rank) - VoteSelection.rank + 1), 0)
    first_place_votes = func.count(case((VoteSelection.rank == 1, 1)))
    rows = (
        session.query(Option.id, Option.name, Option.sort_order, points, first_place_votes)
        .outerjoin(VoteSelection, VoteSelection.option_id == Option.id)
        .filter(Option.category_id == category_id)
        .group_by(Option.id, Option.name, Option.sort_order)
        .all()
    )
    # Drivers hand back int, Decimal or float for the SUM; normalise once here.
    return [
        RankedTallyRow(
            option_id=option_id,
            name=name,
            sort_order=sort_order or 0,
            points=int(total or 0),
            first_place_votes=int(firsts or 0),
        )
        for option_id, name, sort_order, total, firsts in rows
    ]
