# -*- coding: utf-8 -*-
"""
Density Accumulator - Per-cell point counters for a fixed-size raster.

Owns a flat, zero-initialized buffer of ``width * height`` unsigned 32-bit
counters addressed as ``row * width + col``. Counters only ever grow, and
wrap silently past 2**32 - 1.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
from typing import Tuple

# Third-party
import numpy as np

# node_density internal
from node_density.binning.grid import _validate_dimension

COUNT_DTYPE = np.uint32


class DensityAccumulator:
    """Count observations per raster cell.

    Index validity is the caller's contract (``GridIndexer`` guarantees
    it); ``observe`` does not bounds-check beyond what numpy itself does.

    Parameters
    ----------
    width : int
        Raster width in pixels.
    height : int
        Raster height in pixels.

    Examples
    --------
    >>> acc = DensityAccumulator(2, 2)
    >>> acc.observe(1, 0)
    >>> acc.grid.tolist()
    [[0, 1], [0, 0]]
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = _validate_dimension(width, 'width')
        self.height = _validate_dimension(height, 'height')
        self._counts = np.zeros(self.width * self.height, dtype=COUNT_DTYPE)

    def __repr__(self) -> str:
        return (f"DensityAccumulator(width={self.width}, "
                f"height={self.height}, total={self.total()})")

    @property
    def shape(self) -> Tuple[int, int]:
        """The raster ``(rows, cols)``."""
        return (self.height, self.width)

    @property
    def buffer(self) -> np.ndarray:
        """The flat row-major counter buffer."""
        return self._counts

    @property
    def grid(self) -> np.ndarray:
        """The counters as a ``(height, width)`` view of the buffer."""
        return self._counts.reshape(self.height, self.width)

    def index(self, col: int, row: int) -> int:
        """Flat buffer offset of cell ``(col, row)``.

        Accepts scalars or equal-length integer arrays.
        """
        return row * self.width + col

    def observe(self, col: int, row: int) -> None:
        """Increment the counter of cell ``(col, row)`` by one."""
        # Slice update keeps uint32 wrap-around silent
        n = self.index(col, row)
        self._counts[n:n + 1] += 1

    def observe_array(self, cols: np.ndarray, rows: np.ndarray) -> None:
        """Increment one counter per ``(cols[i], rows[i])`` pair.

        Repeated cells are counted once per occurrence.

        Parameters
        ----------
        cols, rows : np.ndarray
            Integer index arrays of equal length.
        """
        np.add.at(self._counts, self.index(cols, rows), 1)

    def merge(self, other: 'DensityAccumulator') -> None:
        """Add another accumulator's counts cell by cell.

        Parameters
        ----------
        other : DensityAccumulator
            Partial grid over the same raster, e.g. from another shard
            of the input.

        Raises
        ------
        ValueError
            If the two grids differ in shape.
        """
        if other.shape != self.shape:
            raise ValueError(
                f"Cannot merge grid of shape {other.shape} into "
                f"grid of shape {self.shape}"
            )
        self._counts += other._counts

    def total(self) -> int:
        """Sum of all counters."""
        return int(self._counts.sum(dtype=np.uint64))
