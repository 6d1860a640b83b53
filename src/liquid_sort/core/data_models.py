"""Core data models for the liquid sort solver."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union


class BoardShapeError(ValueError):
    """Raised when a board or a move does not fit the board's shape or state."""
    pass


class ColorKey(IntEnum):
    """Palette colors plus the reserved masked sentinel.

    The integer values are the cell codes stored in a board's flat array.
    ``UNKNOWN`` is 0 so that a freshly zeroed array is a fully masked board.
    """

    UNKNOWN = 0
    YELLOW = 1
    L_GREEN = 2
    SKIN = 3
    D_PURPLE = 4
    D_GREEN = 5
    GRAY = 6
    D_BLUE = 7
    L_BLUE = 8
    ORANGE = 9
    CYAN = 10
    PURPLE = 11
    D_RED = 12


# Revealed colors only, in palette order
PALETTE = tuple(c for c in ColorKey if c is not ColorKey.UNKNOWN)


def is_empty_capacity(cell: int) -> bool:
    """True if a cell can receive poured liquid.

    Shares its representation with :func:`is_undiscovered`: a masked cell above
    a tube's top is free space, one below it is hidden content.
    """
    return cell == ColorKey.UNKNOWN


def is_undiscovered(cell: int) -> bool:
    """True if a cell holds content whose color has not been revealed yet."""
    return cell == ColorKey.UNKNOWN


def parse_color(value: Union[str, int, ColorKey]) -> ColorKey:
    """Convert a color name, code or ``ColorKey`` into a ``ColorKey``.

    Names are case-insensitive; ``"?"`` is accepted for a masked cell.

    Raises:
        BoardShapeError: If the value names no palette color
    """
    if isinstance(value, ColorKey):
        return value
    if isinstance(value, bool):
        raise BoardShapeError(f"Invalid color value: {value!r}")
    if isinstance(value, int):
        try:
            return ColorKey(value)
        except ValueError:
            raise BoardShapeError(f"Unknown color code: {value}")
    if isinstance(value, str):
        name = value.strip().upper()
        if name == "?":
            return ColorKey.UNKNOWN
        try:
            return ColorKey[name]
        except KeyError:
            raise BoardShapeError(f"Unknown color name: {value!r}")
    raise BoardShapeError(f"Invalid color value: {value!r}")


@dataclass(frozen=True)
class Move:
    """Pour ``count`` units of ``color`` from the top of one tube into another."""

    from_tube: int
    to_tube: int
    color: ColorKey
    count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert move to the ``{from, to, color, count}`` record."""
        return {
            'from': self.from_tube,
            'to': self.to_tube,
            'color': self.color.name,
            'count': self.count
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Move':
        """Create a move from a ``{from, to, color, count}`` record."""
        return cls(
            from_tube=int(data['from']),
            to_tube=int(data['to']),
            color=parse_color(data['color']),
            count=int(data['count'])
        )

    def __str__(self) -> str:
        return f"{self.from_tube} -> {self.to_tube}: {self.count}x {self.color.name}"


@dataclass
class SolverResult:
    """Final verdict of one solve call.

    ``error`` is only set when ``steps`` is empty and no usable path exists.
    ``warning`` is set for fallback paths and for the color parity advisory,
    which is also kept on its own in ``advisory``.
    """

    steps: List[Move] = field(default_factory=list)
    error: Optional[str] = None
    warning: Optional[str] = None
    advisory: Optional[str] = None
    outcome: str = "unknown"
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        """True if ``steps`` is a full solution rather than a fallback."""
        return self.outcome == "solved"

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable dictionary."""
        result: Dict[str, Any] = {
            'steps': [move.to_dict() for move in self.steps],
            'outcome': self.outcome,
        }
        if self.error is not None:
            result['error'] = self.error
        if self.warning is not None:
            result['warning'] = self.warning
        if self.stats:
            result['stats'] = dict(self.stats)
        return result
