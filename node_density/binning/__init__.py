# -*- coding: utf-8 -*-
"""
Binning Module - Accumulate point counts into a fixed-size raster grid.

Provides the grid indexer, the counter accumulator, and the streaming
ingestion loop that ties them to a projector.

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

from node_density.binning.grid import GridIndexer, ScaleFactors
from node_density.binning.accumulator import DensityAccumulator
from node_density.binning.ingestion import (
    DEFAULT_CHUNK_SIZE,
    IngestionLoop,
    IngestionStats,
)

__all__ = [
    'GridIndexer',
    'ScaleFactors',
    'DensityAccumulator',
    'DEFAULT_CHUNK_SIZE',
    'IngestionLoop',
    'IngestionStats',
]
