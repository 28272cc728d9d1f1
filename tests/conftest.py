"""Shared fixtures: a tiny on-disk corpus in the OpenStates dump layout."""

import json
from pathlib import Path

import pytest

from party_line.cache import LegislatorCache
from party_line.loader import RecordLoader


class Corpus:
    """Writes legislator and bill documents under a temporary data root."""

    def __init__(self, root: Path, state: str = "tx"):
        self.root = root
        self.state = state

    def legislator(
        self,
        leg_id: str,
        party: str = "Republican",
        chamber: str = "house",
        terms: tuple[str, ...] = ("85R",),
        full_name: str = "",
    ) -> str:
        path = self.root / "legislators" / leg_id
        path.parent.mkdir(parents=True, exist_ok=True)
        doc = {
            "leg_id": leg_id,
            "full_name": full_name or leg_id,
            "party": party,
            "chamber": chamber,
            "roles": [{"term": t, "chamber": chamber, "type": "member"} for t in terms],
        }
        path.write_text(json.dumps(doc), encoding="utf-8")
        return leg_id

    def members(self, prefix: str, n: int, party: str, **kwargs) -> list[str]:
        return [self.legislator(f"{prefix}{i:03d}", party=party, **kwargs) for i in range(n)]

    def bill(
        self,
        bill_id: str,
        yes: list,
        no: list,
        session: str = "85R",
        chamber: str = "house",
        filename: str | None = None,
        extra_votes: list[dict] | None = None,
    ) -> Path:
        directory = self.root / "bills" / self.state / session / chamber
        directory.mkdir(parents=True, exist_ok=True)
        first = {
            "motion": "passage",
            "date": "2017-05-01 00:00:00",
            "yes_votes": [{"leg_id": v, "name": v or "Unknown"} for v in yes],
            "no_votes": [{"leg_id": v, "name": v or "Unknown"} for v in no],
        }
        doc = {
            "bill_id": bill_id,
            "session": session,
            "chamber": chamber,
            "title": f"Relating to {bill_id}",
            "votes": [first] + (extra_votes or []),
        }
        path = directory / (filename or bill_id)
        path.write_text(json.dumps(doc), encoding="utf-8")
        return path


@pytest.fixture
def corpus(tmp_path) -> Corpus:
    return Corpus(tmp_path)


@pytest.fixture
def loader(corpus) -> RecordLoader:
    return RecordLoader(corpus.root, state=corpus.state, max_workers=4)


@pytest.fixture
def cache(loader) -> LegislatorCache:
    return LegislatorCache(loader)
