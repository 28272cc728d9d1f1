"""Console output for the contradiction report."""

import json

from party_line.config import SEPARATOR_WIDTH
from party_line.models import Legislator


def format_report(result: dict[str, bool], legislator: Legislator | None = None) -> str:
    """Render bill_id -> contradicted-party flags between separator lines."""
    rule = "=" * SEPARATOR_WIDTH
    lines = [rule]
    if legislator is not None:
        name = legislator.full_name or legislator.leg_id
        lines.append(f"  {name} ({legislator.party}, {legislator.chamber})")
        lines.append(rule)
    if result:
        width = max(len(bill_id) for bill_id in result)
        for bill_id, contradicted in result.items():
            lines.append(f"  {bill_id:{width}s}  {contradicted}")
    else:
        lines.append("  No partisan bills voted on.")
    lines.append(rule)
    n = sum(1 for v in result.values() if v)
    lines.append(f"  Contradicted party on {n} of {len(result)} partisan bill(s)")
    lines.append(rule)
    return "\n".join(lines)


def format_json(result: dict[str, bool]) -> str:
    return json.dumps(result, indent=2)


def print_report(
    result: dict[str, bool],
    legislator: Legislator | None = None,
    as_json: bool = False,
) -> None:
    if as_json:
        print(format_json(result))
    else:
        print(format_report(result, legislator))
