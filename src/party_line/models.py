"""Data classes for legislator and bill records."""

from dataclasses import dataclass, field
from typing import Optional


def _require(data: dict, key: str, kind: str):
    if not isinstance(data, dict):
        raise ValueError(f"{kind} document must be a JSON object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ValueError(f"{kind} document has no '{key}'")
    return data[key]


def _as_list(value, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{what}' must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Role:
    """One term a legislator served."""
    term: str
    chamber: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Role":
        return cls(
            term=str(_require(data, "term", "role")),
            chamber=data.get("chamber"),
            type=data.get("type"),
        )


@dataclass(frozen=True)
class Legislator:
    """A legislator record. Read-only for the life of a run."""
    leg_id: str
    party: str
    chamber: str
    roles: tuple[Role, ...] = ()
    full_name: str = ""

    @classmethod
    def from_dict(cls, data: dict, leg_id: str | None = None) -> "Legislator":
        """Build from an OpenStates legislator document.

        ``leg_id`` falls back to the document's own ``leg_id`` (or ``id``) so the
        file name can serve as the identifier when the document omits it.
        Inactive legislators carry no top-level ``party`` or ``chamber``; those
        become "" (counted under no major party).
        """
        if not isinstance(data, dict):
            raise ValueError(f"legislator document must be a JSON object, got {type(data).__name__}")
        party = data.get("party") or ""
        chamber = data.get("chamber") or ""
        ident = leg_id or data.get("leg_id") or data.get("id")
        if not ident:
            raise ValueError("legislator document has no 'leg_id'")
        roles = tuple(
            Role.from_dict(r)
            for r in _as_list(data.get("roles"), "roles")
            if isinstance(r, dict) and r.get("term") is not None
        )
        return cls(
            leg_id=str(ident),
            party=str(party),
            chamber=str(chamber),
            roles=roles,
            full_name=data.get("full_name") or "",
        )

    @property
    def terms(self) -> list[str]:
        """Unique role terms in first-seen order."""
        seen: dict[str, None] = {}
        for role in self.roles:
            seen.setdefault(role.term, None)
        return list(seen)


@dataclass(frozen=True)
class Vote:
    """One entry in a yes/no vote list. ``leg_id`` is None when unresolved."""
    leg_id: Optional[str]
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Vote":
        if not isinstance(data, dict):
            raise ValueError(f"vote entry must be a JSON object, got {type(data).__name__}")
        leg_id = data.get("leg_id")
        return cls(leg_id=str(leg_id) if leg_id else None, name=data.get("name") or "")

    def to_dict(self) -> dict:
        return {"leg_id": self.leg_id, "name": self.name}


@dataclass(frozen=True)
class VoteEvent:
    """A single recorded vote on a bill."""
    yes_votes: tuple[Vote, ...] = ()
    no_votes: tuple[Vote, ...] = ()
    motion: str = ""
    date: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "VoteEvent":
        if not isinstance(data, dict):
            raise ValueError(f"vote event must be a JSON object, got {type(data).__name__}")
        return cls(
            yes_votes=tuple(Vote.from_dict(v) for v in _as_list(data.get("yes_votes"), "yes_votes")),
            no_votes=tuple(Vote.from_dict(v) for v in _as_list(data.get("no_votes"), "no_votes")),
            motion=data.get("motion") or "",
            date=data.get("date") or "",
        )

    def to_dict(self) -> dict:
        return {
            "motion": self.motion,
            "date": self.date,
            "yes_votes": [v.to_dict() for v in self.yes_votes],
            "no_votes": [v.to_dict() for v in self.no_votes],
        }

    def voted_yes(self, leg_id: str) -> bool:
        return any(v.leg_id == leg_id for v in self.yes_votes)

    def voted_no(self, leg_id: str) -> bool:
        return any(v.leg_id == leg_id for v in self.no_votes)

    def voted(self, leg_id: str) -> bool:
        return self.voted_yes(leg_id) or self.voted_no(leg_id)


@dataclass(frozen=True)
class Bill:
    """A bill and its recorded vote events."""
    bill_id: str
    votes: tuple[VoteEvent, ...] = ()
    session: str = ""
    chamber: str = ""
    title: str = ""
    source_file: str = field(default="", compare=False)

    @classmethod
    def from_dict(cls, data: dict, source_file: str = "") -> "Bill":
        bill_id = _require(data, "bill_id", "bill")
        return cls(
            bill_id=str(bill_id),
            votes=tuple(VoteEvent.from_dict(e) for e in _as_list(data.get("votes"), "votes")),
            session=data.get("session") or "",
            chamber=data.get("chamber") or "",
            title=data.get("title") or "",
            source_file=source_file,
        )

    def to_dict(self) -> dict:
        return {
            "bill_id": self.bill_id,
            "session": self.session,
            "chamber": self.chamber,
            "title": self.title,
            "votes": [e.to_dict() for e in self.votes],
        }

    @property
    def first_vote(self) -> VoteEvent:
        """``votes[0]``, or an empty event for bills with no recorded vote."""
        # Later vote events (amendments, concurrence) are not considered.
        return self.votes[0] if self.votes else VoteEvent()


@dataclass(frozen=True)
class SessionChamber:
    """Key for one bill directory: a session term within a chamber."""
    session: str
    chamber: str

    @property
    def label(self) -> str:
        return f"{self.session}/{self.chamber}"
