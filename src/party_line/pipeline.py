"""Bill filter pipeline: partisan bills a legislator voted on, and how they voted."""

import time
from datetime import datetime

from party_line.cache import LegislatorCache
from party_line.config import AnalysisConfig
from party_line.errors import ParseError
from party_line.loader import RecordLoader
from party_line.models import Bill, Legislator, SessionChamber
from party_line.partisanship import is_partisan_bill
from party_line.positions import contradiction_flags


class PartyLineAnalysis:
    """Runs the whole analysis for one legislator against one data root."""

    def __init__(self, config: AnalysisConfig):
        self.config = config.validate()
        self.loader = RecordLoader(
            root=config.root,
            state=config.state,
            max_workers=config.max_workers,
            progress=config.progress,
        )
        self.cache = LegislatorCache(self.loader)
        self.legislator: Legislator | None = None

    def _say(self, message: str = "") -> None:
        if self.config.progress:
            print(message)

    def _step(self, title: str) -> None:
        self._say("\n" + "=" * 60)
        self._say(title)
        self._say("=" * 60)

    # -- Sessions ----------------------------------------------------------------

    @staticmethod
    def sessions_served(legislator: Legislator) -> list[SessionChamber]:
        """One key per unique role term, in the legislator's current chamber."""
        return [SessionChamber(term, legislator.chamber) for term in legislator.terms]

    # -- Partisan bills ----------------------------------------------------------

    def _warm_cache(self, bills: list[Bill]) -> None:
        """Resolve every voter in one batch so classification reads from memory."""
        leg_ids: dict[str, None] = {}
        for bill in bills:
            event = bill.first_vote
            for vote in event.yes_votes + event.no_votes:
                if vote.leg_id:
                    leg_ids.setdefault(vote.leg_id, None)
        self.cache.get_many(list(leg_ids), desc="Legislators")

    def partisan_bill_ids(self, key: SessionChamber) -> dict[str, str]:
        """filename -> bill_id for every partisan bill in one session/chamber.

        Keyed by file so two documents sharing a bill_id are both kept.
        """
        bills = self.loader.load_bills(key.session, key.chamber)
        self._warm_cache(bills)
        partisan = {
            bill.source_file: bill.bill_id
            for bill in bills
            if is_partisan_bill(self.config.threshold, bill, self.cache)
        }
        self._say(f"  {key.label}: {len(partisan)} of {len(bills)} bills are partisan")
        return partisan

    def partisan_bills(self, keys: list[SessionChamber]) -> list[tuple[SessionChamber, Bill]]:
        """Full documents of the partisan bills across all given sessions."""
        combined: list[tuple[SessionChamber, Bill]] = []
        for key in keys:
            files = list(self.partisan_bill_ids(key))
            for bill in self.loader.load_bills(key.session, key.chamber, files):
                combined.append((key, bill))
        return combined

    @staticmethod
    def voted_bills(
        bills: list[tuple[SessionChamber, Bill]], leg_id: str
    ) -> list[tuple[SessionChamber, Bill]]:
        """Keep bills where ``leg_id`` is in the first vote's yes or no list."""
        return [(key, bill) for key, bill in bills if bill.first_vote.voted(leg_id)]

    # -- Run ---------------------------------------------------------------------

    @staticmethod
    def _report_keys(bills: list[tuple[SessionChamber, Bill]]) -> list[str]:
        """Bill ids, qualified only where they repeat.

        An id seen in several sessions gets the session prefix ("85R HB 1"); an id
        repeated within one session also gets its file name ("85R HB 1 [hb1a]").
        """
        by_id: dict[str, int] = {}
        by_session: dict[tuple[str, str], int] = {}
        for key, bill in bills:
            by_id[bill.bill_id] = by_id.get(bill.bill_id, 0) + 1
            pair = (key.session, bill.bill_id)
            by_session[pair] = by_session.get(pair, 0) + 1
        keys = []
        for key, bill in bills:
            if by_session[(key.session, bill.bill_id)] > 1:
                keys.append(f"{key.session} {bill.bill_id} [{bill.source_file}]")
            elif by_id[bill.bill_id] > 1:
                keys.append(f"{key.session} {bill.bill_id}")
            else:
                keys.append(bill.bill_id)
        return keys

    def load_target(self) -> Legislator:
        """The legislator under analysis; unlike voters, it must have a chamber and party."""
        legislator = self.cache.get(self.config.legislator_id)
        path = self.loader.legislator_path(legislator.leg_id)
        if not legislator.chamber:
            raise ParseError(path, "legislator document has no 'chamber'")
        if not (self.config.party or legislator.party):
            raise ParseError(path, "legislator document has no 'party' (pass --party)")
        self.legislator = legislator
        return legislator

    def run(self) -> dict[str, bool]:
        """Return bill id -> whether the legislator contradicted their party."""
        start = time.time()
        cfg = self.config
        self._say("=" * 60)
        self._say(f"  Party-line analysis for {cfg.legislator_id} ({cfg.state})")
        self._say(f"  Started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        self._say(f"  Data root: {cfg.root}  threshold: {cfg.threshold}")
        self._say("=" * 60)

        legislator = self.load_target()
        party = cfg.party or legislator.party
        keys = self.sessions_served(legislator)

        self._step("Step 1: Finding partisan bills in sessions served...")
        bills = self.partisan_bills(keys)
        self._say(f"  {len(bills)} partisan bills across {len(keys)} session(s)")

        self._step("Step 2: Keeping bills the legislator voted on...")
        bills = self.voted_bills(bills, legislator.leg_id)
        self._say(f"  {len(bills)} partisan bills with a recorded vote")

        self._step(f"Step 3: Comparing votes with the {party} position...")
        flags = contradiction_flags([b for _, b in bills], legislator.leg_id, party, self.cache)
        result = dict(zip(self._report_keys(bills), flags))
        self._say(f"  {sum(result.values())} contradiction(s)")
        self._say(f"\n  Complete in {time.time() - start:.1f}s ({len(self.cache)} legislators loaded)")
        return result
