from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional

from .commit.core import BATCH_MODES


@dataclass
class Config:
    """Knobs for writing corrections back to disk."""

    validate_patches: bool = True
    batch_mode: str = "fail_fast"  # "fail_fast" or "all_or_nothing"
    tmp_dir: Optional[str] = None  # default: next to each corrected file
    backup_ext: Optional[str] = None  # e.g. ".bak"
    respect_gitignore: bool = False
    log: bool = False

    def __post_init__(self) -> None:
        if self.batch_mode not in BATCH_MODES:
            raise ValueError(f"batch_mode must be one of {sorted(BATCH_MODES)}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Config":
        """Build a Config from a plain dict, e.g. a table parsed from a config file."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
        return cls(**dict(mapping))

    def commit_kwargs(self) -> dict:
        """Keyword arguments for commit_corrections()."""
        d = asdict(self)
        return {
            "mode": d["batch_mode"],
            "respect_gitignore": d["respect_gitignore"],
            "validate": d["validate_patches"],
            "tmp_dir": d["tmp_dir"],
            "backup_ext": d["backup_ext"],
            "log": d["log"],
        }
