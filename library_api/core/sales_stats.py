"""Sales Stats — pure ranking of genres by quantity sold.

Invariants:
    - Input rows are (genre_name | None, quantity) pairs; no IO
    - Rows without a genre are counted under UNKNOWN_GENRE
    - Ranking is descending by quantity and stable: equal totals keep input order
    - Never raises on empty input — most/least sold are None
"""

from collections.abc import Iterable

from library_api.core.domain_types import UNKNOWN_GENRE


def rank_genres(rows: Iterable[tuple[str | None, int | None]]) -> list[tuple[str, int]]:
    """Merge rows per genre name and sort by summed quantity, highest first."""
    totals: dict[str, int] = {}
    for genre_name, quantity in rows:
        name = genre_name or UNKNOWN_GENRE
        totals[name] = totals.get(name, 0) + (quantity or 0)
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def compute_sales_statistics(
    total_orders: int, rows: Iterable[tuple[str | None, int | None]],
) -> dict:
    """Statistics payload: {totalOrders, mostSoldGenre, leastSoldGenre}."""
    ranking = rank_genres(rows)
    return {
        "totalOrders": total_orders,
        "mostSoldGenre": ranking[0][0] if ranking else None,
        "leastSoldGenre": ranking[-1][0] if ranking else None,
    }
