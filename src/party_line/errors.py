"""Error kinds raised while loading the corpus or configuring a run."""

from pathlib import Path


class PartyLineError(Exception):
    """Base class for every failure the CLI reports and exits non-zero on."""


class NotFoundError(PartyLineError):
    """A bill file, legislator file, or bill directory does not exist."""

    def __init__(self, path: Path, kind: str = "file"):
        self.path = Path(path)
        self.kind = kind
        super().__init__(f"{kind} not found: {self.path}")


class ParseError(PartyLineError):
    """A document is not valid JSON or lacks a field the pipeline needs."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot parse {self.path}: {reason}")


class ReadError(PartyLineError):
    """A file or directory exists but can't be read (permissions, I/O)."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read {self.path}: {reason}")


class ConfigError(PartyLineError):
    """Invalid run configuration (threshold, ids, workers, data root)."""
