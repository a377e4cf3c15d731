from votigo.models.category import effective_max_rank
from votigo.services import storage


def tally_ranked(session, category):
    """Positional points for ``ranked`` categories.

    A selection at rank r earns ``max_rank - r + 1`` points, so with the default
    max rank of 3 the top choice earns 3 and the third choice 1. Ranks past the
    current max rank are counted with the same formula and can go to zero or
    below. Ordered by points, first-place votes, sort order, then option id.
    """
    max_rank = effective_max_rank(category)
    rows = storage.tally_ranked_rows(session, category.id, max_rank)
    rows.sort(
        key=lambda row: (
            -row.points,
            -row.first_place_votes,
            row.sort_order,
            row.option_id,
        )
    )

    winners = []
    if rows and rows[0].points > 0:
        leader = rows[0]
        winners = [
            row.name
            for row in rows
            if row.points == leader.points
            and row.first_place_votes == leader.first_place_votes
        ]

    return {
        "vote_type": category.vote_type,
        "max_rank": max_rank,
        "voter_count": storage.count_votes(session, category.id),
        "total_points": sum(row.points for row in rows),
        "results": rows,
        "winners": winners,
        "is_tie": len(winners) > 1,
    }
