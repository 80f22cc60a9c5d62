"""
Phase 3 – Court coverage heatmap.

Buckets player positions into a coarse pixel grid. Accumulation only
ever adds; the host decides when a session ends and calls reset().
"""
from __future__ import annotations
from collections import defaultdict
from typing import DefaultDict, Dict, Tuple
import math
import numpy as np

from ..models.judgment import PositionJudgment
from .. import config

Cell = Tuple[int, int]


class CoverageAccumulator:
    """
    Court-coverage heatmap keyed by the top-left corner of each grid cell.
    Call .snapshot() for a read-only copy, .to_grid() for a dense array.
    """

    def __init__(self, cell_size: int = config.COVERAGE_CELL_PX):
        self.cell_size = cell_size
        self._counts: DefaultDict[Cell, int] = defaultdict(int)

    def cell_for(self, x: float, y: float) -> Cell:
        c = self.cell_size
        return (int(math.floor(x / c)) * c, int(math.floor(y / c)) * c)

    def add(self, x: float, y: float) -> bool:
        """Count one sample at (x, y). Non-finite points are ignored."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return False
        self._counts[self.cell_for(x, y)] += 1
        return True

    def record(self, x: float, y: float, judgment: PositionJudgment) -> bool:
        """Count a player sample, but only once it has a known court position."""
        if judgment is None or not judgment.is_known:
            return False
        return self.add(x, y)

    def snapshot(self) -> Dict[Cell, int]:
        return dict(self._counts)

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    @property
    def cells_visited(self) -> int:
        return len(self._counts)

    @property
    def coverage_area_px(self) -> int:
        return self.cells_visited * self.cell_size * self.cell_size

    def to_grid(self, width: int, height: int) -> np.ndarray:
        """Dense (rows, cols) count grid covering a width×height frame."""
        c = self.cell_size
        rows, cols = int(math.ceil(height / c)), int(math.ceil(width / c))
        grid = np.zeros((rows, cols), np.int32)
        for (cx, cy), n in self._counts.items():
            gx, gy = cx // c, cy // c
            if 0 <= gx < cols and 0 <= gy < rows:
                grid[gy, gx] += n
        return grid

    def reset(self) -> None:
        self._counts.clear()
