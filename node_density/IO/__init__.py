# -*- coding: utf-8 -*-
"""
IO Module - Point-stream readers and raster sinks.

Point readers turn a source file into a lazy stream of ``GeoPoint``
records; raster sinks receive the finished density grid. Concrete
classes are resolved through small registries so optional dependencies
(pyosmium, rasterio) are only imported when their format is requested.

Dependencies
------------
rasterio
osmium (pyosmium)

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
import importlib
from pathlib import Path
from typing import Dict, Optional, Union

# Base classes
from node_density.IO.base import PointReader, RasterSink
from node_density.IO._backend import RasterEnvironment, require_driver


# Reader registry: maps reader keys to (module_path, class_name)
_READER_REGISTRY: Dict[str, tuple] = {
    'osm': ('node_density.IO.osm', 'OSMNodeReader'),
    'delimited': ('node_density.IO.delimited', 'DelimitedPointReader'),
}

# Format hints handled by the delimited reader; every other hint is an
# osmium format string.
_DELIMITED_FORMATS = ('csv', 'tsv', 'txt')


def _reader_key(path: Path, format: Optional[str]) -> str:
    if format is not None:
        hint = format.lower()
    else:
        hint = path.suffix.lower().lstrip('.')
    if hint in _DELIMITED_FORMATS:
        return 'delimited'
    return 'osm'


def open_points(
    filepath: Union[str, Path],
    format: Optional[str] = None,
) -> PointReader:
    """Open a point stream, choosing the reader from format or extension.

    Parameters
    ----------
    filepath : str or Path
        Source file path.
    format : str, optional
        Explicit format hint. ``'csv'``, ``'tsv'`` and ``'txt'`` select
        the delimited text reader; any other value is passed to osmium
        as its format string. When omitted, the file extension decides.

    Returns
    -------
    PointReader
        Reader instance for the source.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    DependencyError
        If the selected reader needs a package that is not installed.

    Examples
    --------
    >>> from node_density.IO import open_points
    >>> with open_points('region.osm.pbf') as reader:
    ...     first = next(iter(reader))
    """
    path = Path(filepath)
    module_path, class_name = _READER_REGISTRY[_reader_key(path, format)]
    module = importlib.import_module(module_path)
    reader_cls = getattr(module, class_name)
    return reader_cls(path, format=format)


def get_sink(filepath: Union[str, Path]) -> RasterSink:
    """Create the GeoTIFF sink for *filepath*.

    Parameters
    ----------
    filepath : str or Path
        Output raster path.

    Returns
    -------
    RasterSink
    """
    from node_density.IO.geotiff import GeoTIFFSink
    return GeoTIFFSink(filepath)


__all__ = [
    'PointReader',
    'RasterSink',
    'RasterEnvironment',
    'require_driver',
    'open_points',
    'get_sink',
]
