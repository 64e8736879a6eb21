"""In-memory model of the interactive grid that share links are taken from"""

import logging
import random
from typing import Dict, Optional
from grid_state import (
    DEFAULT_GRID_SIZE, GridRecord, GridState,
    normalize_color, parse_grid_size, try_parse_grid_size
)

RANDOM_PALETTE = (
    "#e6194b", "#3cb44b", "#ffe119", "#4363d8", "#f58231",
    "#911eb4", "#46f0f0", "#f032e6", "#bcf60c", "#008080",
)


class GridBoard:
    """A size x size grid of cells that can be painted, cleared and resized.

    Holds the pointer and brush state the paint handlers work with, so every
    board carries its own flags.
    """

    def __init__(self, size: int = DEFAULT_GRID_SIZE, rng: Optional[random.Random] = None):
        self.size = parse_grid_size(size)
        self.pointer_down = False
        self.random_color = False
        self.brush_color: Optional[str] = None
        self._rng = rng or random.Random()
        self._cells: Dict[int, Optional[str]] = {}


    def _check_index(self, index: int):
        if not 0 <= index < self.size * self.size:
            raise IndexError(f"Cell {index} is outside a {self.size}x{self.size} grid")


    def _paint_color(self) -> Optional[str]:
        if self.random_color:
            return self._rng.choice(RANDOM_PALETTE)
        return self.brush_color


    def is_active(self, index: int) -> bool:
        return index in self._cells


    def color_of(self, index: int) -> Optional[str]:
        """Color of an active cell, None for inactive cells or the default color."""
        return self._cells.get(index)


    @property
    def active_count(self) -> int:
        return len(self._cells)


    def activate(self, index: int):
        self._check_index(index)
        self._cells[index] = self._paint_color()


    def toggle(self, index: int):
        self._check_index(index)
        if index in self._cells:
            del self._cells[index]
        else:
            self._cells[index] = self._paint_color()


    def press(self, index: int):
        """Pointer pressed on a cell: start painting and toggle it."""
        self.pointer_down = True
        self.toggle(index)


    def drag_over(self, index: int):
        """Pointer moved onto a cell; paints it only while pressed."""
        if self.pointer_down:
            self.activate(index)


    def release(self):
        self.pointer_down = False


    def clear(self):
        self._cells.clear()


    def resize(self, size) -> bool:
        """Start over with an empty grid of a new size.

        Returns False when the size was rejected and the default was used.
        """
        new_size = try_parse_grid_size(size)
        accepted = new_size is not None
        if not accepted:
            new_size = DEFAULT_GRID_SIZE
            logging.info("Invalid grid size %r, resetting to %d", size, new_size)
        self.size = new_size
        self.pointer_down = False
        self.clear()
        return accepted


    def snapshot(self) -> GridState:
        """Capture the active cells in row-major order."""
        records = [GridRecord(index, self._cells[index]) for index in sorted(self._cells)]
        return GridState(self.size, records)


    def apply(self, state: GridState):
        """Replace the board contents with the cells of a decoded state.

        Records that don't fit the board's current size are skipped.
        """
        self.clear()
        skipped = 0
        for record in state.records:
            if not 0 <= record.index < self.size * self.size:
                skipped += 1
                continue
            self._cells[record.index] = normalize_color(record.color)
        if skipped:
            logging.info("Skipped %d cells outside the %dx%d grid", skipped, self.size, self.size)
