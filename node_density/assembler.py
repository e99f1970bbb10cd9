# -*- coding: utf-8 -*-
"""
Raster Assembler - Turn a finished density grid into a georeferenced raster.

Drives a ``RasterSink`` through the output sequence once ingestion has
completed: create a single-band uint32 raster, tag it, attach the affine
georeferencing transform and spatial reference, bulk-write the counters,
optionally build averaged overviews, and close.

The georeferencing transform is the exact inverse of the grid indexer::

    x = bottom_left.x + col / factor_x
    y = top_right.y   - row / factor_y

Dependencies
------------
pyproj

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
import logging
import math
from typing import List, Tuple

# node_density internal
from node_density.binning.accumulator import DensityAccumulator
from node_density.binning.grid import ScaleFactors
from node_density.geolocation._backend import require_proj_backend
from node_density.geolocation.projection import ProjectedExtent, Projector
from node_density.IO.base import RasterSink
from node_density.vocabulary import OverviewResampling

logger = logging.getLogger(__name__)

IMAGE_DESCRIPTION = 'OpenStreetMap node density'
COPYRIGHT = (
    'Copyright OpenStreetMap contributors '
    '(http://www.openstreetmap.org/copyright), '
    'License: CC-BY-SA (http://creativecommons.org/licenses/by-sa/2.0/)'
)
SOFTWARE = 'node_density'

OVERVIEW_BASE_TILE = 256
OVERVIEW_FACTORS = (2, 4, 8, 16, 32, 64, 128, 256)


def overview_factors(width: int) -> List[int]:
    """Decimation factors for a raster of the given width.

    One level per halving down to roughly a 256-pixel base tile, capped
    at eight levels.

    Parameters
    ----------
    width : int
        Raster width in pixels.

    Returns
    -------
    List[int]
        Leading ``min(floor(log2(width / 256)), 8)`` entries of
        ``(2, 4, ..., 256)``; empty for widths below 512.
    """
    levels = min(math.floor(math.log2(width / OVERVIEW_BASE_TILE)),
                 len(OVERVIEW_FACTORS))
    return list(OVERVIEW_FACTORS[:max(levels, 0)])


def spatial_reference_wkt(description: str) -> str:
    """Encode a projector description as WKT1 (GDAL flavour)."""
    require_proj_backend()
    import pyproj
    from pyproj.enums import WktVersion

    return pyproj.CRS.from_user_input(description).to_wkt(
        WktVersion.WKT1_GDAL
    )


class RasterAssembler:
    """Write a density grid to a raster sink.

    Parameters
    ----------
    extent : ProjectedExtent
        Projected corners of the working bounding box.
    scale : ScaleFactors
        Pixels per projection unit, as used by the grid indexer.
    projector : Projector
        Projection whose description becomes the spatial reference.
    compression : str
        GTiff compression identifier.
    build_overviews : bool
        Whether to build averaged overview levels.

    Examples
    --------
    >>> assembler = RasterAssembler(extent, indexer.scale, projector,
    ...                             compression='LZW', build_overviews=True)
    >>> with GeoTIFFSink('density.tif') as sink:
    ...     assembler.assemble(accumulator, sink)
    """

    def __init__(
        self,
        extent: ProjectedExtent,
        scale: ScaleFactors,
        projector: Projector,
        compression: str = 'LZW',
        build_overviews: bool = False,
    ) -> None:
        self.extent = extent
        self.scale = scale
        self.projector = projector
        self.compression = compression.upper()
        self.build_overviews = build_overviews

    @property
    def geo_transform(self) -> Tuple[float, float, float, float, float, float]:
        """GDAL-ordered affine coefficients of the output raster."""
        pixel_width, pixel_height = self.scale.pixel_size
        return (self.extent.bottom_left.x, pixel_width, 0.0,
                self.extent.top_right.y, 0.0, -pixel_height)

    def assemble(self, accumulator: DensityAccumulator,
                 sink: RasterSink) -> None:
        """Write *accumulator* through *sink* and close it.

        Parameters
        ----------
        accumulator : DensityAccumulator
            Finished counter grid.
        sink : RasterSink
            Unopened output sink.

        Raises
        ------
        OutputCreationError
            If the sink cannot be created.
        OutputWriteError
            If the band write fails.
        """
        height, width = accumulator.shape
        try:
            sink.create(width, height, band_count=1, dtype='uint32',
                        options={'compress': self.compression,
                                 'tiled': True})

            sink.set_metadata('TIFFTAG_IMAGEDESCRIPTION', IMAGE_DESCRIPTION)
            sink.set_metadata('TIFFTAG_COPYRIGHT', COPYRIGHT)
            sink.set_metadata('TIFFTAG_SOFTWARE', SOFTWARE)

            sink.set_georeferencing(self.geo_transform)
            sink.set_spatial_reference(
                spatial_reference_wkt(self.projector.description)
            )

            sink.write_band(accumulator.grid, 1)

            if self.build_overviews:
                factors = overview_factors(width)
                logger.info("Building %d overview levels: %s",
                            len(factors), factors)
                sink.build_overviews(factors,
                                     OverviewResampling.AVERAGE.value)
        finally:
            sink.close()
