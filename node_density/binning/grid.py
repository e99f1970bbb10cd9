# -*- coding: utf-8 -*-
"""
Grid Indexer - Map planar coordinates to raster pixel indices.

The raster is laid out row-major with row 0 at the top, i.e. at the
maximum projected y. Projected y grows northward, so the row formula
negates y while the column formula does not::

    col = clamp(0, floor(( x - bottom_left.x) * factor_x), width  - 1)
    row = clamp(0, floor((-y - bottom_left.y) * factor_y), height - 1)

Coordinates that fall marginally outside the extent through floating-point
error saturate at the nearest edge cell instead of being rejected.

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
import math
from dataclasses import dataclass
from typing import Tuple

# Third-party
import numpy as np

# node_density internal
from node_density.exceptions import ConfigurationError
from node_density.geolocation.projection import ProjectedExtent


def _validate_dimension(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(
            f"{name} must be int, got {type(value).__name__}"
        )
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return int(value)


@dataclass(frozen=True)
class ScaleFactors:
    """Pixels per projection unit along each axis.

    Attributes
    ----------
    factor_x : float
        ``width / extent.width``.
    factor_y : float
        ``height / extent.height``.
    """

    factor_x: float
    factor_y: float

    @classmethod
    def from_extent(cls, extent: ProjectedExtent, width: int,
                    height: int) -> 'ScaleFactors':
        return cls(width / extent.width, height / extent.height)

    @property
    def pixel_size(self) -> Tuple[float, float]:
        """Pixel ``(width, height)`` in projection units."""
        return (1 / self.factor_x, 1 / self.factor_y)


class GridIndexer:
    """Map in-extent planar coordinates to ``(col, row)`` pixel indices.

    Parameters
    ----------
    extent : ProjectedExtent
        Projected corners of the working bounding box.
    width : int
        Raster width in pixels.
    height : int
        Raster height in pixels.

    Raises
    ------
    ConfigurationError
        If width or height is not a positive integer.

    Examples
    --------
    >>> from node_density.geolocation import Coordinates, ProjectedExtent
    >>> extent = ProjectedExtent(Coordinates(-180.0, -90.0),
    ...                          Coordinates(180.0, 90.0))
    >>> indexer = GridIndexer(extent, 360, 180)
    >>> indexer.to_pixel(0.5, 89.5)
    (180, 0)
    """

    def __init__(self, extent: ProjectedExtent, width: int,
                 height: int) -> None:
        self.width = _validate_dimension(width, 'width')
        self.height = _validate_dimension(height, 'height')
        self.extent = extent
        self.scale = ScaleFactors.from_extent(extent, self.width,
                                              self.height)

    def __repr__(self) -> str:
        return (f"GridIndexer(width={self.width}, height={self.height}, "
                f"extent={self.extent})")

    @property
    def shape(self) -> Tuple[int, int]:
        """The raster ``(rows, cols)``."""
        return (self.height, self.width)

    def to_pixel(self, x: float, y: float) -> Tuple[int, int]:
        """Pixel index for a single planar coordinate.

        Parameters
        ----------
        x, y : float
            Planar coordinates in projection units.

        Returns
        -------
        Tuple[int, int]
            ``(col, row)``, always inside ``[0, width-1] x [0, height-1]``.
        """
        origin = self.extent.bottom_left
        col = math.floor((x - origin.x) * self.scale.factor_x)
        row = math.floor((-y - origin.y) * self.scale.factor_y)
        return (min(max(col, 0), self.width - 1),
                min(max(row, 0), self.height - 1))

    def to_pixel_array(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Vectorized :meth:`to_pixel` over 1D coordinate arrays.

        Parameters
        ----------
        xs, ys : np.ndarray
            Finite planar coordinates.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(cols, rows)`` as int64 arrays.
        """
        origin = self.extent.bottom_left
        cols = np.floor((np.asarray(xs, dtype=np.float64) - origin.x)
                        * self.scale.factor_x)
        rows = np.floor((-np.asarray(ys, dtype=np.float64) - origin.y)
                        * self.scale.factor_y)
        np.clip(cols, 0, self.width - 1, out=cols)
        np.clip(rows, 0, self.height - 1, out=rows)
        return cols.astype(np.int64), rows.astype(np.int64)
