"""Read bill and legislator JSON documents from a local OpenStates-style dump.

Layout under the data root:

  bills/<state>/<session>/<chamber>/<billFile>   one JSON document per bill
  legislators/<legislatorId>                     one JSON document, no extension

Reads of a whole collection go through ``scatter_gather``: one task per item
on a thread pool, joined in input order.  The first failure propagates and the
rest of the batch is cancelled; nothing is retried.
"""

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, TypeVar

from tqdm import tqdm

from party_line.config import DEFAULT_STATE, MAX_WORKERS
from party_line.errors import NotFoundError, ParseError, ReadError
from party_line.models import Bill, Legislator

T = TypeVar("T")
R = TypeVar("R")


def scatter_gather(
    fn: Callable[[T], R],
    items: Iterable[T],
    max_workers: int = MAX_WORKERS,
    desc: str | None = None,
    unit: str = "file",
    progress: bool = False,
) -> list[R]:
    """Apply ``fn`` to every item concurrently and return results in input order."""
    items = list(items)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(fn, item) for item in items]
        results: list[R] = []
        try:
            for future in tqdm(
                futures,
                total=len(futures),
                desc=desc,
                unit=unit,
                disable=not progress,
                leave=False,
            ):
                results.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise
    return results


def read_json(path: Path) -> object:
    """Read and decode one JSON document, mapping failures to our error kinds."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise NotFoundError(path) from None
    except IsADirectoryError:
        raise ParseError(path, "is a directory, expected a JSON file") from None
    except UnicodeDecodeError as e:
        raise ParseError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(path, f"malformed JSON ({e})") from e


class RecordLoader:
    """Loads bills and legislators for one state from a data root."""

    def __init__(
        self,
        root: Path,
        state: str = DEFAULT_STATE,
        max_workers: int = MAX_WORKERS,
        progress: bool = False,
    ):
        self.root = Path(root)
        self.state = state
        self.max_workers = max_workers
        self.progress = progress

    # -- Paths -----------------------------------------------------------------

    def bills_dir(self, session: str, chamber: str) -> Path:
        return self.root / "bills" / self.state / session / chamber

    def legislator_path(self, leg_id: str) -> Path:
        return self.root / "legislators" / leg_id

    # -- Bills -----------------------------------------------------------------

    def list_bill_files(self, session: str, chamber: str) -> list[str]:
        """Bill filenames in a session/chamber directory, sorted, hidden files skipped."""
        directory = self.bills_dir(session, chamber)
        if not directory.is_dir():
            raise NotFoundError(directory, kind="bill directory")
        try:
            return sorted(
                p.name for p in directory.iterdir() if p.is_file() and not p.name.startswith(".")
            )
        except OSError as e:
            raise ReadError(directory, e.strerror or str(e)) from e

    def load_bill(self, session: str, chamber: str, filename: str) -> Bill:
        path = self.bills_dir(session, chamber) / filename
        data = read_json(path)
        try:
            return Bill.from_dict(data, source_file=filename)
        except ValueError as e:
            raise ParseError(path, str(e)) from e

    def load_bills(
        self,
        session: str,
        chamber: str,
        filenames: list[str] | None = None,
    ) -> list[Bill]:
        """Load bills concurrently; all files in the directory when ``filenames`` is None."""
        if filenames is None:
            filenames = self.list_bill_files(session, chamber)
        return scatter_gather(
            lambda name: self.load_bill(session, chamber, name),
            filenames,
            max_workers=self.max_workers,
            desc=f"Bills {session}/{chamber}",
            unit="bill",
            progress=self.progress,
        )

    # -- Legislators -----------------------------------------------------------

    def load_legislator(self, leg_id: str) -> Legislator:
        path = self.legislator_path(leg_id)
        data = read_json(path)
        try:
            return Legislator.from_dict(data, leg_id=leg_id)
        except ValueError as e:
            raise ParseError(path, str(e)) from e
