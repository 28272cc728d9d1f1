"""
End-to-end tests for the bill filter pipeline in pipeline.py.

Builds small corpora on disk and runs PartyLineAnalysis against them.

Run: uv run pytest tests/test_pipeline.py -v
"""

import json

import pytest

from party_line.config import AnalysisConfig
from party_line.errors import ConfigError, NotFoundError, ParseError
from party_line.models import SessionChamber
from party_line.pipeline import PartyLineAnalysis

TARGET = "TXL000484"

# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def two_bill_corpus(corpus):
    """One Republican (term 85R, house) and two bills in 85R/house.

    HB 1: yes = 9 R + 1 D (partisan at 0.9); target votes no -> contradiction.
    HB 2: yes = 5 R + 5 D (balanced, not partisan); target votes yes.
    """
    corpus.legislator(TARGET, party="Republican", chamber="house", terms=("85R",), full_name="Dennis Paul")
    reps = corpus.members("R", 9, "Republican")
    dems = corpus.members("D", 5, "Democratic")
    corpus.bill("HB 1", yes=reps + dems[:1], no=[TARGET])
    corpus.bill("HB 2", yes=reps[:4] + [TARGET] + dems[:5], no=[])
    return corpus


def _analysis(corpus, **kwargs) -> PartyLineAnalysis:
    kwargs.setdefault("progress", False)
    return PartyLineAnalysis(AnalysisConfig(root=corpus.root, legislator_id=TARGET, **kwargs))


# ── run() ────────────────────────────────────────────────────────────────────


class TestRun:
    """Full pipeline on fixture corpora."""

    def test_single_partisan_contradiction(self, two_bill_corpus):
        assert _analysis(two_bill_corpus).run() == {"HB 1": True}

    def test_legislator_recorded(self, two_bill_corpus):
        analysis = _analysis(two_bill_corpus)
        analysis.run()
        assert analysis.legislator.leg_id == TARGET

    def test_voting_with_party(self, corpus):
        corpus.legislator(TARGET, party="Republican")
        reps = corpus.members("R", 9, "Republican")
        corpus.bill("HB 3", yes=reps + [TARGET], no=corpus.members("D", 1, "Democratic"))
        assert _analysis(corpus).run() == {"HB 3": False}

    def test_partisan_bill_not_voted_on_excluded(self, corpus):
        corpus.legislator(TARGET, party="Republican")
        corpus.bill("HB 4", yes=corpus.members("R", 10, "Republican"), no=[])
        assert _analysis(corpus).run() == {}

    def test_party_override(self, two_bill_corpus):
        # Democrats in HB 1: 1 yes, 0 no -> position yes; target voted no.
        assert _analysis(two_bill_corpus, party="Democratic").run() == {"HB 1": True}

    def test_lower_threshold_includes_balanced_bill(self, two_bill_corpus):
        # At 0.5 the 5/5 tie counts as partisan; Republicans were 5 yes / 0 no.
        result = _analysis(two_bill_corpus, threshold=0.5).run()
        assert result == {"HB 1": True, "HB 2": False}

    def test_only_first_vote_event_considered(self, corpus):
        corpus.legislator(TARGET, party="Republican")
        reps = corpus.members("R", 9, "Republican")
        later = {"yes_votes": [{"leg_id": TARGET}], "no_votes": []}
        corpus.bill("HB 5", yes=reps, no=[], extra_votes=[later])
        assert _analysis(corpus).run() == {}

    def test_multiple_sessions_qualify_repeated_ids(self, corpus):
        corpus.legislator(TARGET, party="Republican", terms=("84R", "85R"))
        reps = corpus.members("R", 9, "Republican")
        corpus.bill("HB 1", yes=reps + [TARGET], no=[], session="84R")
        corpus.bill("HB 1", yes=reps, no=[TARGET], session="85R")
        assert _analysis(corpus).run() == {"84R HB 1": False, "85R HB 1": True}

    def test_progress_output(self, two_bill_corpus, capsys):
        _analysis(two_bill_corpus, progress=True).run()
        out = capsys.readouterr().out
        assert "Step 1" in out
        assert "85R/house: 1 of 2 bills are partisan" in out


# ── Stages ───────────────────────────────────────────────────────────────────


class TestStages:
    def test_sessions_served(self, corpus):
        corpus.legislator(TARGET, chamber="senate", terms=("84R", "85R", "84R", "851"))
        analysis = _analysis(corpus)
        legislator = analysis.cache.get(TARGET)
        assert analysis.sessions_served(legislator) == [
            SessionChamber("84R", "senate"),
            SessionChamber("85R", "senate"),
            SessionChamber("851", "senate"),
        ]

    def test_partisan_bill_ids(self, two_bill_corpus):
        analysis = _analysis(two_bill_corpus)
        assert analysis.partisan_bill_ids(SessionChamber("85R", "house")) == {"HB 1": "HB 1"}

    def test_reload_by_filename(self, corpus):
        corpus.legislator(TARGET, party="Republican")
        corpus.bill("HB 6", yes=corpus.members("R", 9, "Republican"), no=[TARGET], filename="hb6.json")
        analysis = _analysis(corpus)
        assert analysis.partisan_bill_ids(SessionChamber("85R", "house")) == {"hb6.json": "HB 6"}
        assert analysis.run() == {"HB 6": True}

    def test_same_bill_id_in_two_files(self, corpus):
        corpus.legislator(TARGET, party="Republican")
        reps = corpus.members("R", 9, "Republican")
        corpus.bill("HB 1", yes=reps + [TARGET], no=[], filename="hb1a")
        corpus.bill("HB 1", yes=reps, no=[TARGET], filename="hb1b")
        analysis = _analysis(corpus)
        assert analysis.partisan_bill_ids(SessionChamber("85R", "house")) == {
            "hb1a": "HB 1",
            "hb1b": "HB 1",
        }
        assert analysis.run() == {"85R HB 1 [hb1a]": False, "85R HB 1 [hb1b]": True}


# ── Voter records ────────────────────────────────────────────────────────────


class TestVoterRecords:
    """Voters only need a party; inactive legislators have none."""

    def test_voter_without_party_or_chamber(self, corpus):
        corpus.legislator(TARGET, party="Republican")
        reps = corpus.members("R", 9, "Republican")
        inactive = corpus.root / "legislators" / "TXL000001"
        inactive.write_text(json.dumps({"leg_id": "TXL000001", "active": False, "roles": []}))
        corpus.bill("HB 1", yes=reps + ["TXL000001"], no=[TARGET])
        assert _analysis(corpus).run() == {"HB 1": True}

    def test_target_without_chamber(self, corpus):
        path = corpus.root / "legislators" / TARGET
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"party": "Republican", "roles": [{"term": "85R"}]}))
        with pytest.raises(ParseError, match="chamber"):
            _analysis(corpus).run()

    def test_target_without_party_needs_override(self, corpus):
        corpus.legislator(TARGET, party="")
        corpus.bill("HB 1", yes=corpus.members("R", 9, "Republican"), no=[TARGET])
        with pytest.raises(ParseError, match="party"):
            _analysis(corpus).run()
        assert _analysis(corpus, party="Republican").run() == {"HB 1": True}


# ── Failures ─────────────────────────────────────────────────────────────────


class TestFailures:
    """Errors abort the run instead of producing partial results."""

    def test_missing_session_directory(self, corpus):
        corpus.legislator(TARGET, terms=("85R", "86R"))
        corpus.bill("HB 1", yes=[], no=[])
        with pytest.raises(NotFoundError, match="86R"):
            _analysis(corpus).run()

    def test_missing_legislator(self, corpus):
        with pytest.raises(NotFoundError):
            _analysis(corpus).run()

    def test_voter_without_file(self, corpus):
        corpus.legislator(TARGET)
        corpus.bill("HB 1", yes=["TXL000999"], no=[TARGET])
        with pytest.raises(NotFoundError, match="TXL000999"):
            _analysis(corpus).run()

    @pytest.mark.parametrize("threshold", [0, -0.1, 1.5])
    def test_bad_threshold(self, corpus, threshold):
        with pytest.raises(ConfigError, match="threshold"):
            _analysis(corpus, threshold=threshold)

    def test_bad_workers(self, corpus):
        with pytest.raises(ConfigError, match="max_workers"):
            _analysis(corpus, max_workers=0)

    def test_missing_root(self, tmp_path):
        with pytest.raises(ConfigError, match="not a directory"):
            PartyLineAnalysis(AnalysisConfig(root=tmp_path / "nope", legislator_id=TARGET))
