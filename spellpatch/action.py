import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .commit.core import CommitSummary, commit_corrections
from .config import Config
from .models.edit import Edit
from .models.origin import ContentOrigin
from .models.suggestion import SuggestionSet

log = logging.getLogger(__name__)

ACTIONS = ("check", "fix", "reflow")


@dataclass(frozen=True)
class Finish:
    """How a run ended: aborted by the user, or done with a number of mistakes."""

    aborted: bool = False
    mistake_count: int = 0

    @classmethod
    def abort(cls) -> "Finish":
        return cls(aborted=True)

    @classmethod
    def mistakes(cls, n: int) -> "Finish":
        return cls(mistake_count=n)

    def found_any(self) -> bool:
        return not self.aborted and self.mistake_count > 0


@dataclass
class UserPicked:
    """Edits accepted by the picker, per origin. `aborted` means write nothing."""

    edits: Dict[ContentOrigin, List[Edit]] = field(default_factory=dict)
    aborted: bool = False

    def add(self, origin: ContentOrigin, edit: Edit) -> None:
        self.edits.setdefault(origin, []).append(edit)

    def total_count(self) -> int:
        return sum(len(v) for v in self.edits.values())


PickerCallback = Callable[[SuggestionSet], UserPicked]


def _sorted_batch(per_origin: Dict[ContentOrigin, List[Edit]]) -> Dict[ContentOrigin, List[Edit]]:
    # Stable: inserts sharing a position keep the order they were accepted in.
    return {o: sorted(edits, key=lambda e: e.span.start) for o, edits in per_origin.items() if edits}


def _accept_first(suggestions: SuggestionSet) -> Dict[ContentOrigin, List[Edit]]:
    accepted: Dict[ContentOrigin, List[Edit]] = {}
    for origin, items in suggestions:
        edits = [e for e in (s.first_edit() for s in items) if e is not None]
        accepted[origin] = edits
    return accepted


def write_user_pick_changes_to_disk(picked: UserPicked, config: Optional[Config] = None) -> CommitSummary:
    """
    Write the picked edits back, consuming the pick.

    A pick must only ever be written once: the spans refer to the files as
    they were before correction, so a second pass would shift every edit.
    """
    config = config or Config()
    if picked.total_count() == 0:
        log.debug("No edits to apply")
        return CommitSummary()
    log.debug("Writing changes back to disk")
    batch = _sorted_batch(picked.edits)
    picked.edits = {}
    return commit_corrections(batch, **config.commit_kwargs())


def run(
    action: str,
    suggestions: SuggestionSet,
    *,
    picker_callback: Optional[PickerCallback] = None,
    log_callback: Optional[Callable[[str], None]] = None,
    config: Optional[Config] = None,
) -> Finish:
    """
    Run one of the three actions over the analyzers' suggestions.

    Args:
        action: "check" reports only, "reflow" accepts the first replacement
                of every suggestion, "fix" lets `picker_callback` decide.
        suggestions: Findings grouped per origin.
        picker_callback: Function(SuggestionSet) -> UserPicked. Required for "fix".
        log_callback: Optional function to receive user-facing report lines.
        config: Write settings; defaults to Config().

    Returns:
        Finish.abort() if the picker aborted, else Finish.mistakes(n). For
        "check" n is every suggestion; for "reflow" and "fix" it is the
        number of edits actually written (git-ignored files do not count).
    """
    if action not in ACTIONS:
        raise ValueError(f"action must be one of {ACTIONS}")
    config = config or Config()

    def _log(msg: str):
        if log_callback:
            log_callback(msg)
        log.debug(msg)

    if action == "check":
        for _origin, items in suggestions:
            for s in items:
                _log(str(s))
        return Finish.mistakes(suggestions.total_count())

    if action == "reflow":
        batch = _sorted_batch(_accept_first(suggestions))
        summary = commit_corrections(batch, **config.commit_kwargs())
        for path in summary.skipped:
            _log(f"Skipped git-ignored file {path}")
        _log(f"Applied {summary.edit_count} edit(s) to {len(summary.success)} file(s)")
        return Finish.mistakes(summary.edit_count)

    if picker_callback is None:
        raise ValueError("the 'fix' action needs a picker_callback")
    picked = picker_callback(suggestions)
    if picked.aborted:
        _log("Aborted, no files were changed")
        return Finish.abort()
    summary = write_user_pick_changes_to_disk(picked, config)
    for path in summary.skipped:
        _log(f"Skipped git-ignored file {path}")
    return Finish.mistakes(summary.edit_count)
