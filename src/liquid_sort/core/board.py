"""Flat-array board model.

A board is stored as a single read-only ``int8`` array of ``N * C`` cell
codes, tube ``i`` occupying ``cells[i*C:(i+1)*C]``. Cell 0 of a tube is the
open end, cell ``C-1`` the sealed bottom. Boards are never mutated after
construction; applying a move returns a new board.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union
import numpy as np

from .data_models import (
    BoardShapeError, ColorKey, Move, PALETTE, is_empty_capacity, is_undiscovered, parse_color
)

DEFAULT_TUBE_COUNT = 14
DEFAULT_SLOT_COUNT = 4

CellValue = Union[str, int, ColorKey]


class Board:
    """Immutable board of ``tube_count`` tubes with ``slot_count`` cells each."""

    __slots__ = ('cells', 'tube_count', 'slot_count', '_rows')

    def __init__(self, cells: np.ndarray, tube_count: int, slot_count: int):
        """Wrap a flat cell array.

        Args:
            cells: Flat array of ``tube_count * slot_count`` cell codes
            tube_count: Number of tubes (N)
            slot_count: Capacity of each tube (C)

        Raises:
            BoardShapeError: If the array does not match the declared shape
        """
        if tube_count < 1 or slot_count < 1:
            raise BoardShapeError(
                f"Board needs at least one tube and one slot, got {tube_count}x{slot_count}"
            )
        cells = np.array(cells, dtype=np.int8).ravel()
        if cells.size != tube_count * slot_count:
            raise BoardShapeError(
                f"Expected {tube_count * slot_count} cells, got {cells.size}"
            )
        if cells.size and (cells.min() < 0 or cells.max() > max(ColorKey)):
            raise BoardShapeError("Board contains an invalid cell code")
        cells.flags.writeable = False
        self.cells = cells
        self.tube_count = tube_count
        self.slot_count = slot_count
        self._rows: Optional[Tuple[Tuple[int, ...], ...]] = None

    @classmethod
    def from_tubes(cls,
                   tubes: Sequence[Sequence[CellValue]],
                   tube_count: Optional[int] = None,
                   slot_count: Optional[int] = None) -> 'Board':
        """Build a board from nested per-tube cell lists.

        Args:
            tubes: One sequence of colors per tube, open end first
            tube_count: Required number of tubes (defaults to ``len(tubes)``)
            slot_count: Required tube capacity (defaults to the first tube's length)

        Raises:
            BoardShapeError: On a wrong tube count, a ragged tube or an unknown color
        """
        if tube_count is None:
            tube_count = len(tubes)
        if slot_count is None:
            slot_count = len(tubes[0]) if len(tubes) else 0
        if len(tubes) != tube_count:
            raise BoardShapeError(f"Expected {tube_count} tubes, got {len(tubes)}")

        codes: List[int] = []
        for i, tube in enumerate(tubes):
            if len(tube) != slot_count:
                raise BoardShapeError(
                    f"Tube {i} has {len(tube)} cells, expected {slot_count}"
                )
            codes.extend(int(parse_color(cell)) for cell in tube)
        return cls(np.array(codes, dtype=np.int8), tube_count, slot_count)

    @classmethod
    def empty(cls,
              tube_count: int = DEFAULT_TUBE_COUNT,
              slot_count: int = DEFAULT_SLOT_COUNT) -> 'Board':
        """Create a fully masked board."""
        return cls(np.zeros(tube_count * slot_count, dtype=np.int8), tube_count, slot_count)

    @property
    def grid(self) -> np.ndarray:
        """Read-only ``(tube_count, slot_count)`` view of the cells."""
        return self.cells.reshape(self.tube_count, self.slot_count)

    @property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        """Per-tube cell codes as plain tuples, computed once per board."""
        if self._rows is None:
            self._rows = tuple(tuple(row) for row in self.grid.tolist())
        return self._rows

    def tube(self, index: int) -> Tuple[ColorKey, ...]:
        """Cells of one tube, open end first."""
        return tuple(ColorKey(c) for c in self.rows[index])

    # Per-tube introspection

    def top_index(self, index: int) -> Optional[int]:
        """Lowest cell index holding a revealed color, or None if fully masked."""
        for i, cell in enumerate(self.rows[index]):
            if not is_undiscovered(cell):
                return i
        return None

    def top_color(self, index: int) -> Optional[ColorKey]:
        """Color at the tube's top, or None if fully masked."""
        top = self.top_index(index)
        if top is None:
            return None
        return ColorKey(self.rows[index][top])

    def run_length(self, index: int) -> int:
        """Number of same-colored cells from the top; masked cells end the run."""
        row = self.rows[index]
        top = self.top_index(index)
        if top is None:
            return 0
        color = row[top]
        run = 0
        for cell in row[top:]:
            if cell != color:
                break
            run += 1
        return run

    def available_capacity(self, index: int) -> int:
        """Free cells above the top; a fully masked tube offers full capacity."""
        top = self.top_index(index)
        return self.slot_count if top is None else top

    def first_masked_index(self, index: int) -> Optional[int]:
        """Index of the first masked cell in the tube, or None."""
        for i, cell in enumerate(self.rows[index]):
            if is_empty_capacity(cell):
                return i
        return None

    def has_undiscovered_below_top(self, index: int) -> bool:
        """True if masked content sits at or below the tube's top."""
        top = self.top_index(index)
        if top is None:
            return False
        return any(is_undiscovered(c) for c in self.rows[index][top:])

    def is_fully_masked(self, index: int) -> bool:
        """True if every cell of the tube is masked."""
        return self.top_index(index) is None

    # Whole-board operations

    def canonical_key(self) -> bytes:
        """Exact, order-sensitive key for visited-state deduplication.

        Every cell is encoded in exactly one byte and every tube in exactly
        ``slot_count`` bytes, so cell and tube boundaries are unambiguous.
        """
        return self.cells.tobytes()

    def color_counts(self) -> Dict[ColorKey, int]:
        """Count of revealed units per palette color (zero counts included)."""
        counts = np.bincount(self.cells.astype(np.int64), minlength=len(ColorKey))
        return {color: int(counts[color]) for color in PALETTE}

    def apply_move(self, move: Move) -> 'Board':
        """Return a new board with ``move`` applied.

        The source's top ``count`` cells become masked and the destination is
        filled upward from just above its top (or from the sealed bottom if
        it has no top).

        Raises:
            BoardShapeError: If the move cannot be applied to this board
        """
        n = self.tube_count
        if not (0 <= move.from_tube < n and 0 <= move.to_tube < n) or move.from_tube == move.to_tube:
            raise BoardShapeError(f"Invalid tube indices in move: {move}")

        source_top = self.top_index(move.from_tube)
        if source_top is None:
            raise BoardShapeError(f"Source tube {move.from_tube} has nothing to pour")
        if self.rows[move.from_tube][source_top] != move.color:
            raise BoardShapeError(
                f"Source tube {move.from_tube} top is not {move.color.name}"
            )
        if move.count < 1 or move.count > self.run_length(move.from_tube):
            raise BoardShapeError(f"Invalid pour count {move.count} for tube {move.from_tube}")

        dest_top = self.top_index(move.to_tube)
        target = self.slot_count if dest_top is None else dest_top
        if dest_top is not None and self.rows[move.to_tube][dest_top] != move.color:
            raise BoardShapeError(
                f"Destination tube {move.to_tube} top does not match {move.color.name}"
            )
        if move.count > target:
            raise BoardShapeError(
                f"Destination tube {move.to_tube} has room for {target}, move pours {move.count}"
            )

        cells = self.cells.copy()
        src = move.from_tube * self.slot_count
        dst = move.to_tube * self.slot_count
        for k in range(move.count):
            cells[src + source_top + k] = ColorKey.UNKNOWN
            cells[dst + target - 1 - k] = move.color
        return Board(cells, self.tube_count, self.slot_count)

    def replay(self, steps: Iterable[Move]) -> Iterable['Board']:
        """Yield the board after each step of ``steps``, applied in order."""
        board = self
        for move in steps:
            board = board.apply_move(move)
            yield board

    def is_excavation_move(self, move: Move) -> bool:
        """True if the move pours from a tube that still hides masked content."""
        return self.has_undiscovered_below_top(move.from_tube)

    def copy(self) -> 'Board':
        """Independent copy of the board."""
        return Board(self.cells.copy(), self.tube_count, self.slot_count)

    def to_tubes(self) -> List[List[str]]:
        """Nested color-name lists, the inverse of :meth:`from_tubes`."""
        return [[ColorKey(c).name for c in row] for row in self.rows]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.tube_count == other.tube_count
                and self.slot_count == other.slot_count
                and np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.tube_count, self.slot_count, self.canonical_key()))

    def __repr__(self) -> str:
        tubes = " | ".join(
            ",".join(ColorKey(c).name if c else "?" for c in row) for row in self.rows
        )
        return f"Board({self.tube_count}x{self.slot_count}: {tubes})"
