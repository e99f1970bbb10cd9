# -*- coding: utf-8 -*-
"""
OSM Node Reader - Stream node locations from OpenStreetMap files.

Reads the node subset of any file format libosmium understands (PBF, XML,
OPL, O5M, optionally bz2/gz compressed). Ways, relations and changesets
are never decoded. Nodes without a valid location are skipped.

Dependencies
------------
osmium (pyosmium)

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
from pathlib import Path
from typing import Iterator, Optional, Union

_HAS_OSMIUM = False

try:
    import osmium
    _HAS_OSMIUM = True
except ImportError:
    pass

# node_density internal
from node_density.exceptions import DependencyError
from node_density.geolocation.projection import GeoPoint
from node_density.IO.base import PointReader


class OSMNodeReader(PointReader):
    """Iterate the node locations of an OSM file.

    Parameters
    ----------
    filepath : str or Path
        Path to the OSM file.
    format : str, optional
        Explicit osmium format string (``'pbf'``, ``'xml'``, ``'opl'``,
        ``'osm.bz2'``, ...). Detected from the file suffix when omitted.

    Raises
    ------
    DependencyError
        If pyosmium is not installed.
    FileNotFoundError
        If the file does not exist.

    Examples
    --------
    >>> from node_density.IO.osm import OSMNodeReader
    >>> with OSMNodeReader('planet.osm.pbf') as reader:
    ...     for point in reader:
    ...         print(point.lon, point.lat)
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        format: Optional[str] = None,
    ) -> None:
        if not _HAS_OSMIUM:
            raise DependencyError(
                "pyosmium is required for reading OSM files. "
                "Install with: pip install osmium"
            )
        super().__init__(filepath, format=format)

    def __iter__(self) -> Iterator[GeoPoint]:
        source = osmium.io.File(str(self.filepath), self.format or '')
        for node in osmium.FileProcessor(source, osmium.osm.NODE):
            location = node.location
            if location.valid():
                yield GeoPoint(location.lon, location.lat)
