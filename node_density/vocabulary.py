# -*- coding: utf-8 -*-
"""
Vocabulary - Enumerations shared across node_density modules.

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

from enum import Enum


class ProjectionKind(Enum):
    """The closed set of projection behaviours a ``Projector`` can take.

    ``GEOGRAPHIC`` and ``WEB_MERCATOR`` are evaluated directly; any other
    registered EPSG code is delegated to PROJ through pyproj.
    """

    GEOGRAPHIC = "geographic"
    WEB_MERCATOR = "web_mercator"
    PROJ = "proj"


class Compression(Enum):
    """GeoTIFF compression identifiers accepted for the output raster.

    Values are the GDAL ``COMPRESS`` creation option strings.
    """

    NONE = "NONE"
    LZW = "LZW"
    DEFLATE = "DEFLATE"
    PACKBITS = "PACKBITS"
    LZMA = "LZMA"
    ZSTD = "ZSTD"


class OverviewResampling(Enum):
    """Resampling methods a raster sink may use to build overviews."""

    AVERAGE = "average"
