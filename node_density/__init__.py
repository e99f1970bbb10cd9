# -*- coding: utf-8 -*-
"""
node_density - Point density rasters from streamed geographic records.

Bins the nodes of an OpenStreetMap file (or any stream of lon/lat points)
into a fixed-size grid of unsigned 32-bit counters in a chosen projection
and writes the result as a georeferenced, optionally overviewed GeoTIFF.

Dependencies
------------
numpy
rasterio
pyproj
osmium

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from node_density.exceptions import (
    DensityError,
    ConfigurationError,
    DependencyError,
    OutputCreationError,
    DriverUnavailableError,
    OutputWriteError,
)
from node_density.vocabulary import (
    ProjectionKind,
    Compression,
    OverviewResampling,
)
from node_density.geolocation import (
    BoundingBox,
    GeoPoint,
    ProjectedExtent,
    Projector,
)
from node_density.binning import (
    DensityAccumulator,
    GridIndexer,
    IngestionLoop,
    IngestionStats,
    ScaleFactors,
)
from node_density.assembler import RasterAssembler, overview_factors
from node_density.config import DensityOptions
from node_density.pipeline import DensityPipeline, run

__all__ = [
    'DensityError',
    'ConfigurationError',
    'DependencyError',
    'OutputCreationError',
    'DriverUnavailableError',
    'OutputWriteError',
    'ProjectionKind',
    'Compression',
    'OverviewResampling',
    'BoundingBox',
    'GeoPoint',
    'ProjectedExtent',
    'Projector',
    'DensityAccumulator',
    'GridIndexer',
    'IngestionLoop',
    'IngestionStats',
    'ScaleFactors',
    'RasterAssembler',
    'overview_factors',
    'DensityOptions',
    'DensityPipeline',
    'run',
]
