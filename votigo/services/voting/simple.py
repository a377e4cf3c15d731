from dataclasses import replace

from votigo.services import storage


def tally_simple(session, category):
    """Count selections per option for ``single`` and ``approval`` categories.

    Options without selections are reported with 0. Ordered by count, then the
    option's sort order, then its id.
    """
    rows = storage.tally_simple_rows(session, category.id)
    rows.sort(key=lambda row: (-row.votes, row.sort_order, row.option_id))

    total_selections = sum(row.votes for row in rows)
    results = [
        replace(
            row,
            percent=(row.votes / total_selections * 100) if total_selections > 0 else 0.0,
        )
        for row in rows
    ]

    top_votes = results[0].votes if results else 0
    winners = []
    if top_votes > 0:
        winners = [row.name for row in results if row.votes == top_votes]

    return {
        "vote_type": category.vote_type,
        "voter_count": storage.count_votes(session, category.id),
        "total_selections": total_selections,
        "results": results,
        "winners": winners,
        "is_tie": len(winners) > 1,
    }
