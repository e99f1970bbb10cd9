# -*- coding: utf-8 -*-
"""
Geolocation Module - Geographic to planar coordinate transforms.

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

from node_density.geolocation.projection import (
    EPSG_WGS84,
    EPSG_WEB_MERCATOR,
    MERCATOR_MAX_LAT,
    BoundingBox,
    Coordinates,
    GeoPoint,
    ProjectedExtent,
    Projector,
)

__all__ = [
    'EPSG_WGS84',
    'EPSG_WEB_MERCATOR',
    'MERCATOR_MAX_LAT',
    'BoundingBox',
    'Coordinates',
    'GeoPoint',
    'ProjectedExtent',
    'Projector',
]
