# -*- coding: utf-8 -*-
"""
Density Pipeline - Wire a point stream to a georeferenced count raster.

Builds the working bounding box, projector, projected extent, grid
indexer and accumulator for a set of options, runs the streaming
ingestion, and hands the finished grid to the raster assembler.
Ingestion always completes before any output is created.

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
import logging
from typing import Callable, Iterable, Optional

# node_density internal
from node_density.assembler import RasterAssembler
from node_density.binning.accumulator import DensityAccumulator
from node_density.binning.grid import GridIndexer
from node_density.binning.ingestion import (
    DEFAULT_CHUNK_SIZE,
    IngestionLoop,
    IngestionStats,
)
from node_density.config import DensityOptions
from node_density.geolocation.projection import (
    BoundingBox,
    GeoPoint,
    ProjectedExtent,
    Projector,
)
from node_density.IO import get_sink, open_points
from node_density.IO.base import RasterSink

logger = logging.getLogger(__name__)


class DensityPipeline:
    """Single-pass density computation for a fixed raster.

    Parameters
    ----------
    epsg : int
        EPSG code of the output projection.
    width, height : int
        Raster size in pixels.
    compression : str
        GTiff compression identifier.
    build_overviews : bool
        Build averaged overview levels on output.
    chunk_size : int
        Stream records binned per vectorized step.

    Raises
    ------
    ConfigurationError
        If the EPSG code is unknown or the raster size is invalid.

    Examples
    --------
    >>> pipeline = DensityPipeline(epsg=3857, width=2048, height=2048)
    >>> pipeline.ingest(points)
    >>> with GeoTIFFSink('density.tif') as sink:
    ...     pipeline.write(sink)
    """

    def __init__(
        self,
        epsg: int = 3857,
        width: int = 1024,
        height: int = 1024,
        compression: str = 'LZW',
        build_overviews: bool = False,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.projector = Projector(epsg)
        self.box = BoundingBox.for_epsg(self.projector.epsg)
        self.extent = ProjectedExtent.from_box(self.box, self.projector)
        self.indexer = GridIndexer(self.extent, width, height)
        self.accumulator = DensityAccumulator(width, height)
        self.loop = IngestionLoop(self.box, self.projector, self.indexer,
                                  self.accumulator, chunk_size=chunk_size)
        self.assembler = RasterAssembler(self.extent, self.indexer.scale,
                                         self.projector,
                                         compression=compression,
                                         build_overviews=build_overviews)

    @classmethod
    def from_options(cls, options: DensityOptions) -> 'DensityPipeline':
        return cls(
            epsg=options.epsg,
            width=options.width,
            height=options.height,
            compression=options.compression,
            build_overviews=options.build_overviews,
            chunk_size=options.chunk_size,
        )

    def __repr__(self) -> str:
        return (f"DensityPipeline(projector={self.projector!r}, "
                f"shape={self.indexer.shape})")

    def ingest(
        self,
        points: Iterable[GeoPoint],
        progress_callback: Optional[Callable[[int], None]] = None,
    ) -> IngestionStats:
        """Count every point of *points* that lies in the working box."""
        return self.loop.run(points, progress_callback=progress_callback)

    def write(self, sink: RasterSink) -> None:
        """Assemble the grid into *sink*."""
        self.assembler.assemble(self.accumulator, sink)


def run(options: DensityOptions) -> IngestionStats:
    """Compute a density raster from *options* end to end.

    Parameters
    ----------
    options : DensityOptions
        Validated run options.

    Returns
    -------
    IngestionStats
        Point counts of the ingestion pass.

    Raises
    ------
    ConfigurationError
        Before ingestion, for an unusable configuration.
    OutputCreationError, OutputWriteError
        After ingestion, if the raster cannot be written.
    """
    pipeline = DensityPipeline.from_options(options)
    logger.debug("%r", pipeline)

    logger.info("Counting nodes...")
    with open_points(options.input_path, options.input_format) as reader:
        stats = pipeline.ingest(reader)
    logger.info("Done.")

    logger.info("Writing image to output file...")
    pipeline.write(get_sink(options.output_path))
    logger.info("Done.")
    return stats
