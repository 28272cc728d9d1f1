"""Command-line interface for the party-line analysis."""

import argparse
import sys
from pathlib import Path

from party_line.config import DEFAULT_ROOT, DEFAULT_STATE, MAX_WORKERS, PARTISAN_THRESHOLD, AnalysisConfig
from party_line.errors import PartyLineError
from party_line.output import print_report
from party_line.pipeline import PartyLineAnalysis


def _list_sessions(analysis: PartyLineAnalysis) -> None:
    legislator = analysis.load_target()
    keys = analysis.sessions_served(legislator)
    print(f"Sessions served by {legislator.full_name or legislator.leg_id}:")
    print()
    for key in keys:
        directory = analysis.loader.bills_dir(key.session, key.chamber)
        status = "ok" if directory.is_dir() else "missing"
        print(f"    {key.label:22s}  {directory}  [{status}]")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="party-line",
        description="Report partisan bills a legislator voted on and whether they broke with their party.",
    )
    parser.add_argument(
        "legislator_id",
        help="Legislator id, e.g. TXL000484",
    )
    parser.add_argument(
        "--root",
        "-r",
        type=Path,
        default=DEFAULT_ROOT,
        help=f"Data root holding bills/ and legislators/ (default: {DEFAULT_ROOT})",
    )
    parser.add_argument(
        "--state",
        default=DEFAULT_STATE,
        help=f"State code under bills/ (default: {DEFAULT_STATE})",
    )
    parser.add_argument(
        "--threshold",
        "-t",
        type=float,
        default=PARTISAN_THRESHOLD,
        help=f"Party share of a vote block that makes it partisan (default: {PARTISAN_THRESHOLD})",
    )
    parser.add_argument(
        "--party",
        default=None,
        help="Compare against this party's position (default: the legislator's own party)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=MAX_WORKERS,
        help=f"Concurrent file reads (default: {MAX_WORKERS})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as a JSON object (implies --quiet)",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--list-sessions",
        action="store_true",
        help="List the sessions the legislator served and exit",
    )

    args = parser.parse_args(argv)

    config = AnalysisConfig(
        root=args.root,
        legislator_id=args.legislator_id,
        state=args.state,
        threshold=args.threshold,
        party=args.party,
        max_workers=args.workers,
        progress=not (args.quiet or args.json),
    )

    try:
        analysis = PartyLineAnalysis(config)
        if args.list_sessions:
            _list_sessions(analysis)
            return
        result = analysis.run()
    except PartyLineError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    print_report(result, analysis.legislator, as_json=args.json)
