"""Classify vote blocks and bills as partisan.

A vote block (the yes-votes or the no-votes of one roll call) is partisan when
the larger of the two major parties holds at least ``threshold`` of the block's
Republican + Democratic votes.  Votes without a ``leg_id`` are dropped before
resolution, and members of other parties don't count toward either side.  A
block with no Republican or Democratic votes is never partisan.
"""

import polars as pl

from party_line.cache import LegislatorCache
from party_line.config import DEMOCRATIC, REPUBLICAN
from party_line.models import Bill, Vote

VOTE_FRAME_SCHEMA = {"leg_id": pl.Utf8, "vote": pl.Utf8, "party": pl.Utf8}


def resolve_block(
    votes: tuple[Vote, ...] | list[Vote], vote: str | None, cache: LegislatorCache
) -> pl.DataFrame:
    """One row per resolved voter: leg_id, vote ("yes"/"no", or null), party."""
    leg_ids = [v.leg_id for v in votes if v.leg_id]
    legislators = cache.get_many(leg_ids)
    return pl.DataFrame(
        {
            "leg_id": leg_ids,
            "vote": [vote] * len(leg_ids),
            "party": [leg.party for leg in legislators],
        },
        schema=VOTE_FRAME_SCHEMA,
    )


def party_counts(frame: pl.DataFrame) -> dict[str, int]:
    """Number of rows per party."""
    if frame.is_empty():
        return {}
    counts = frame.group_by("party").agg(pl.len().alias("n"))
    return dict(zip(counts["party"].to_list(), counts["n"].to_list()))


def is_partisan_counts(threshold: float, counts: dict[str, int]) -> bool:
    r = counts.get(REPUBLICAN, 0)
    d = counts.get(DEMOCRATIC, 0)
    total = r + d
    if total == 0:
        return False
    leading = r if r > d else d
    return leading / total >= threshold


def is_partisan_vote_block(
    threshold: float, votes, cache: LegislatorCache, vote: str | None = None
) -> bool:
    """``vote`` only labels the resolved rows; it doesn't affect the result."""
    return is_partisan_counts(threshold, party_counts(resolve_block(votes, vote, cache)))


def is_partisan_bill(threshold: float, bill: Bill, cache: LegislatorCache) -> bool:
    """True if either the yes-block or the no-block of the first vote is partisan."""
    event = bill.first_vote
    return is_partisan_vote_block(threshold, event.yes_votes, cache, "yes") or is_partisan_vote_block(
        threshold, event.no_votes, cache, "no"
    )
