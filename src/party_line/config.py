"""Configuration constants and run configuration for the party-line analysis."""

from dataclasses import dataclass
from pathlib import Path

from party_line.errors import ConfigError

DEFAULT_ROOT = Path("data")
DEFAULT_STATE = "tx"

PARTISAN_THRESHOLD = 0.9  # share of R+D votes one party must hold in a vote block
MAX_WORKERS = 8  # concurrent file reads per scatter-gather

REPUBLICAN = "Republican"
DEMOCRATIC = "Democratic"

SEPARATOR_WIDTH = 60


@dataclass(frozen=True)
class AnalysisConfig:
    """Everything one analysis run needs, passed explicitly into the pipeline."""

    root: Path
    legislator_id: str
    state: str = DEFAULT_STATE
    threshold: float = PARTISAN_THRESHOLD
    party: str | None = None  # None = the legislator's own party
    max_workers: int = MAX_WORKERS
    progress: bool = True

    def validate(self) -> "AnalysisConfig":
        """Raise ConfigError for values the pipeline can't work with; return self."""
        if not 0 < self.threshold <= 1:
            raise ConfigError(f"threshold must be in (0, 1], got {self.threshold}")
        if not self.legislator_id or not self.legislator_id.strip():
            raise ConfigError("legislator id must not be empty")
        if not self.state or not self.state.strip():
            raise ConfigError("state must not be empty")
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")
        if not Path(self.root).is_dir():
            raise ConfigError(f"data root is not a directory: {self.root}")
        return self
