"""Party majority positions and whether a legislator broke from theirs.

A party's position on a bill is "yes" when more of its members voted yes than
no on the first vote, otherwise "no" (ties resolve to "no").  A legislator
contradicted their party when they voted on the bill but are not in the vote
list matching that position.
"""

from typing import Iterable

import polars as pl

from party_line.cache import LegislatorCache
from party_line.models import Bill
from party_line.partisanship import resolve_block

YES = "yes"
NO = "no"


def vote_frame(bill: Bill, cache: LegislatorCache) -> pl.DataFrame:
    """All resolved voters of the bill's first vote: leg_id, vote, party."""
    event = bill.first_vote
    return pl.concat(
        [
            resolve_block(event.yes_votes, YES, cache),
            resolve_block(event.no_votes, NO, cache),
        ]
    )


def party_vote_counts(bill: Bill, cache: LegislatorCache) -> pl.DataFrame:
    """Per-party yes/no counts and majority position.

    Returns DataFrame with columns: party, yes_count, no_count, total_voters,
    majority_position.
    """
    return (
        vote_frame(bill, cache)
        .group_by("party")
        .agg(
            (pl.col("vote") == YES).sum().cast(pl.Int64).alias("yes_count"),
            (pl.col("vote") == NO).sum().cast(pl.Int64).alias("no_count"),
        )
        .with_columns(
            (pl.col("yes_count") + pl.col("no_count")).alias("total_voters"),
            pl.when(pl.col("yes_count") > pl.col("no_count"))
            .then(pl.lit(YES))
            .otherwise(pl.lit(NO))
            .alias("majority_position"),
        )
        .sort("party")
    )


def party_position(bill: Bill, party: str, cache: LegislatorCache) -> str:
    counts = party_vote_counts(bill, cache).filter(pl.col("party") == party)
    if counts.is_empty():
        return NO
    return counts["majority_position"][0]


def did_contradict(bill: Bill, leg_id: str, position: str) -> bool:
    event = bill.first_vote
    if not event.voted(leg_id):
        return False
    if position == YES:
        return not event.voted_yes(leg_id)
    return not event.voted_no(leg_id)


def contradiction_flags(
    bills: Iterable[Bill],
    leg_id: str,
    party: str,
    cache: LegislatorCache,
) -> list[bool]:
    """Per bill, in order: did ``leg_id`` vote against ``party``'s position."""
    return [did_contradict(bill, leg_id, party_position(bill, party, cache)) for bill in bills]


def contradictions(
    bills: Iterable[Bill],
    leg_id: str,
    party: str,
    cache: LegislatorCache,
) -> dict[str, bool]:
    """Map bill_id -> whether ``leg_id`` voted against ``party``'s position."""
    bills = list(bills)
    flags = contradiction_flags(bills, leg_id, party, cache)
    return {bill.bill_id: flag for bill, flag in zip(bills, flags)}
