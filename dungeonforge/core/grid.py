"""Rectangular grids of cell data."""

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, TypeVar

from dungeonforge.errors import OutOfBoundsError

T = TypeVar("T")
U = TypeVar("U")


class Grid(Generic[T]):
    """2D grid backed by a flat row-major list for cache-friendly access.

    Reads and writes outside the grid raise :class:`OutOfBoundsError`;
    callers that probe neighbours check :meth:`in_bounds` first.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int, default: T) -> None:
        self.width = width
        self.height = height
        self._cells: list[T] = [default] * (width * height)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[T]]) -> Grid[T]:
        """Build a grid from a list of rows (``rows[y][x]``)."""
        materialized = [list(r) for r in rows]
        height = len(materialized)
        width = len(materialized[0]) if height else 0
        if any(len(r) != width for r in materialized):
            raise ValueError("rows must all have the same length")
        grid: Grid[T] = cls.__new__(cls)
        grid.width = width
        grid.height = height
        grid._cells = [c for r in materialized for c in r]
        return grid

    @classmethod
    def from_values(cls, width: int, height: int, values: list[T]) -> Grid[T]:
        """Wrap a row-major list of ``width * height`` values without copying."""
        if len(values) != width * height:
            raise ValueError(f"expected {width * height} values, got {len(values)}")
        grid: Grid[T] = cls.__new__(cls)
        grid.width = width
        grid.height = height
        grid._cells = values
        return grid

    # -- access --

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> T:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._cells[y * self.width + x]
        raise OutOfBoundsError(x, y, self.width, self.height)

    def set(self, x: int, y: int, value: T) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self._cells[y * self.width + x] = value
            return
        raise OutOfBoundsError(x, y, self.width, self.height)

    def fill(self, value: T) -> None:
        self._cells = [value] * (self.width * self.height)

    # -- iteration --

    def cells(self) -> Iterator[tuple[int, int, T]]:
        """Yield ``(x, y, value)`` in row-major order."""
        w = self.width
        for i, value in enumerate(self._cells):
            yield i % w, i // w, value

    def values(self) -> list[T]:
        """Row-major copy of the cell values."""
        return list(self._cells)

    def rows(self) -> list[list[T]]:
        w = self.width
        return [self._cells[y * w:(y + 1) * w] for y in range(self.height)]

    def count(self, value: T) -> int:
        return self._cells.count(value)

    def map(self, fn: Callable[[T], U]) -> Grid[U]:
        out: Grid[U] = Grid.__new__(Grid)
        out.width = self.width
        out.height = self.height
        out._cells = [fn(c) for c in self._cells]
        return out

    # -- copy --

    def copy(self) -> Grid[T]:
        new: Grid[T] = Grid.__new__(Grid)
        new.width = self.width
        new.height = self.height
        new._cells = list(self._cells)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
