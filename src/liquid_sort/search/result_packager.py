"""Turn a finished search into a :class:`SolverResult`."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from liquid_sort.core.data_models import ColorKey, Move, SolverResult

BUDGET_WARNING = "computation limit reached — best excavation path returned"
BUDGET_ERROR = "search space too large — try a few manual moves first"
EXHAUSTED_WARNING = "no full solution found — best excavation path returned"
EXHAUSTED_ERROR = "current board has no solution — verify the colors entered"


class SearchOutcome(str, Enum):
    """Terminal state of the search engine."""

    SOLVED = "solved"
    BUDGET_EXCEEDED = "budget_exceeded"
    EXHAUSTED = "exhausted"


@dataclass
class SearchReport:
    """Raw outcome of one search, before packaging."""

    outcome: SearchOutcome
    path: List[Move] = field(default_factory=list)
    fallback_path: List[Move] = field(default_factory=list)
    fallback_score: int = 0
    parity_issues: Dict[ColorKey, int] = field(default_factory=dict)
    slot_count: int = 4
    statistics: Dict[str, Any] = field(default_factory=dict)


def format_parity_advisory(parity_issues: Dict[ColorKey, int], slot_count: int) -> Optional[str]:
    """Describe revealed colors whose counts cannot fill whole tubes.

    Returns:
        Advisory text, or None if every color count is a multiple of ``slot_count``
    """
    if not parity_issues:
        return None
    details = ", ".join(
        f"{color.name} x{count}" for color, count in sorted(parity_issues.items())
    )
    return (
        f"color counts are not multiples of {slot_count} ({details}); "
        f"more masked content must be revealed before these colors can fill a tube"
    )


def _join_warnings(*messages: Optional[str]) -> Optional[str]:
    parts = [m for m in messages if m]
    return "\n".join(parts) if parts else None


def package_result(report: SearchReport) -> SolverResult:
    """Resolve a search report into success, fallback or error.

    Args:
        report: Report produced by the search engine

    Returns:
        Solver result; the parity advisory is attached to every outcome
    """
    advisory = format_parity_advisory(report.parity_issues, report.slot_count)
    result = SolverResult(
        advisory=advisory,
        outcome=report.outcome.value,
        stats=dict(report.statistics)
    )

    if report.outcome is SearchOutcome.SOLVED:
        result.steps = list(report.path)
        result.warning = advisory
        return result

    if report.outcome is SearchOutcome.BUDGET_EXCEEDED:
        fallback_warning, no_progress_error = BUDGET_WARNING, BUDGET_ERROR
    else:
        fallback_warning, no_progress_error = EXHAUSTED_WARNING, EXHAUSTED_ERROR

    if report.fallback_path:
        result.steps = list(report.fallback_path)
        result.warning = _join_warnings(fallback_warning, advisory)
    else:
        result.error = no_progress_error
        result.warning = advisory
    return result
