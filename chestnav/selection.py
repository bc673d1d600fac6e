"""Keyboard selection cursor over the search result rows."""

from typing import Generic, Optional, Sequence, Tuple, TypeVar

from core.exceptions import ValidationError

R = TypeVar('R')


class SearchSelector(Generic[R]):
    """Index-addressed cursor over an explicit, rebuildable row table.

    The cursor is a plain index into the current table. It is validated
    against the table bounds on every access, so replacing the rows can never
    leave it pointing at a row that no longer exists.
    """

    def __init__(self, rows: Sequence[R] = ()):
        self._rows: Tuple[R, ...] = tuple(rows)
        self._index: Optional[int] = None

    def set_rows(self, rows: Sequence[R]) -> None:
        """Replace the row table and clear the cursor."""
        self._rows = tuple(rows)
        self._index = None

    @property
    def rows(self) -> Tuple[R, ...]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def index(self) -> Optional[int]:
        """Current cursor position, or None when nothing valid is selected."""
        if self._index is None or not 0 <= self._index < len(self._rows):
            return None
        return self._index

    @property
    def current(self) -> Optional[R]:
        index = self.index
        return self._rows[index] if index is not None else None

    def focus(self) -> Optional[R]:
        """Select the first row when the list gains focus with nothing selected."""
        if self.index is None and self._rows:
            self._index = 0
        return self.current

    def down(self) -> Optional[R]:
        """Move one row down, wrapping from the last row to the first."""
        if not self._rows:
            self._index = None
            return None
        index = self.index
        self._index = 0 if index is None else (index + 1) % len(self._rows)
        return self.current

    def up(self) -> Optional[R]:
        """Move one row up, wrapping from the first row to the last."""
        if not self._rows:
            self._index = None
            return None
        index = self.index
        last = len(self._rows) - 1
        self._index = last if index is None else (index - 1) % len(self._rows)
        return self.current

    def select(self, index: int) -> R:
        """Select a row directly, as a pointer click does.

        Raises:
            ValidationError: If the index is outside the current rows
        """
        if not 0 <= index < len(self._rows):
            raise ValidationError("index", index, f"Row index out of range (0..{len(self._rows) - 1})")
        self._index = index
        return self._rows[index]

    def activate(self) -> Optional[R]:
        """Return the row to navigate to, if any is selected."""
        return self.current

    def clear(self) -> None:
        """Drop the rows and the cursor together."""
        self._rows = ()
        self._index = None
