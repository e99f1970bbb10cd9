# -*- coding: utf-8 -*-
"""
Ingestion Loop - Stream geographic points into a density accumulator.

Consumes a point stream exactly once, in stream order, holding at most
one chunk of records at a time. Each chunk goes through the containment
test, projection, pixel indexing and counter increment as whole numpy
arrays. Points outside the working bounding box are discarded silently.

Author
------
Steven Siebert

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
import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

# Third-party
import numpy as np

# node_density internal
from node_density.binning.accumulator import DensityAccumulator
from node_density.binning.grid import GridIndexer
from node_density.geolocation.projection import (
    BoundingBox,
    GeoPoint,
    Projector,
)

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536


@dataclass
class IngestionStats:
    """Point counts from one ingestion run."""

    seen: int = 0
    accepted: int = 0

    @property
    def discarded(self) -> int:
        return self.seen - self.accepted


class IngestionLoop:
    """Feed points through Projector -> GridIndexer -> DensityAccumulator.

    Parameters
    ----------
    box : BoundingBox
        Working extent; only points inside it are counted.
    projector : Projector
        Projection to the raster's CRS.
    indexer : GridIndexer
        Planar-to-pixel mapping.
    accumulator : DensityAccumulator
        Counter grid receiving the observations.
    chunk_size : int
        Number of stream records binned per vectorized step.

    Examples
    --------
    >>> loop = IngestionLoop(box, projector, indexer, accumulator)
    >>> stats = loop.run(reader)
    >>> stats.accepted
    10000
    """

    def __init__(
        self,
        box: BoundingBox,
        projector: Projector,
        indexer: GridIndexer,
        accumulator: DensityAccumulator,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if indexer.shape != accumulator.shape:
            raise ValueError(
                f"Indexer shape {indexer.shape} does not match "
                f"accumulator shape {accumulator.shape}"
            )
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.box = box
        self.projector = projector
        self.indexer = indexer
        self.accumulator = accumulator
        self.chunk_size = chunk_size

    def ingest_point(self, point: GeoPoint) -> bool:
        """Count a single point.

        Returns
        -------
        bool
            True if the point was inside the box and counted.
        """
        if not self.box.contains(point):
            return False
        x, y = self.projector.project(point.lon, point.lat)
        col, row = self.indexer.to_pixel(x, y)
        self.accumulator.observe(col, row)
        return True

    def ingest_chunk(self, lons: np.ndarray, lats: np.ndarray) -> int:
        """Count a chunk of points given as coordinate arrays.

        Parameters
        ----------
        lons, lats : np.ndarray
            1D float64 arrays in degrees.

        Returns
        -------
        int
            Number of points counted.
        """
        inside = self.box.contains_array(lons, lats)
        xs, ys = self.projector.project(lons[inside], lats[inside])
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)

        # Contained points that PROJ cannot transform come back as inf
        finite = np.isfinite(xs) & np.isfinite(ys)
        if not finite.all():
            xs, ys = xs[finite], ys[finite]

        cols, rows = self.indexer.to_pixel_array(xs, ys)
        self.accumulator.observe_array(cols, rows)
        return int(cols.size)

    def run(
        self,
        points: Iterable[GeoPoint],
        progress_callback: Optional[Callable[[int], None]] = None,
    ) -> IngestionStats:
        """Consume the whole point stream.

        Parameters
        ----------
        points : Iterable[GeoPoint]
            Point stream; any iterable of records whose first two fields
            are longitude and latitude.
        progress_callback : callable, optional
            Called with the running count of records seen after every
            chunk.

        Returns
        -------
        IngestionStats
        """
        stats = IngestionStats()
        iterator = iter(points)
        chunk_index = 0
        while True:
            chunk = list(itertools.islice(iterator, self.chunk_size))
            if not chunk:
                break
            # Records may carry fields past lon/lat
            coords = np.array([(p[0], p[1]) for p in chunk], dtype=np.float64)
            accepted = self.ingest_chunk(coords[:, 0], coords[:, 1])
            stats.seen += len(chunk)
            stats.accepted += accepted
            chunk_index += 1
            logger.debug("Chunk %d: %d points, %d counted",
                         chunk_index, len(chunk), accepted)
            if progress_callback is not None:
                progress_callback(stats.seen)

        logger.info("Counted %d of %d points (%d outside extent)",
                    stats.accepted, stats.seen, stats.discarded)
        return stats
