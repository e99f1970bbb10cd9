# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for point readers and raster sinks.

Defines the two IO seams of the density pipeline: ``PointReader``, the
point stream the ingestion loop consumes, and ``RasterSink``, the write
contract the raster assembler drives. Concrete implementations (OSM,
delimited text, GeoTIFF) inherit from these classes.

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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Sequence, Union

import numpy as np

from node_density.geolocation.projection import GeoPoint


class PointReader(ABC):
    """
    Abstract base class for geographic point streams.

    A reader is iterated once, lazily, yielding one ``GeoPoint`` per
    record. Records are never materialized in full.

    Attributes
    ----------
    filepath : Path
        Path to the source file
    format : Optional[str]
        Explicit source format hint, or None to detect from the file

    Notes
    -----
    Malformed records are the reader's concern. Implementations should
    fail fast by raising from ``__iter__`` rather than skipping silently.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        format: Optional[str] = None
    ) -> None:
        """
        Initialize the point reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the source file
        format : Optional[str], default=None
            Explicit source format hint

        Raises
        ------
        FileNotFoundError
            If the specified filepath does not exist
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")
        self.format = format

    @abstractmethod
    def __iter__(self) -> Iterator[GeoPoint]:
        """
        Iterate over the points of the source in file order.

        Yields
        ------
        GeoPoint
            Longitude and latitude in degrees
        """
        pass

    def close(self) -> None:
        """
        Close the reader and release resources.

        Default implementation does nothing. Override if the reader
        maintains open file handles or other resources.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False


class RasterSink(ABC):
    """
    Abstract base class for raster output sinks.

    The sink is driven in a fixed order by the raster assembler:
    ``create``, metadata and georeferencing setters, one ``write_band``
    per band, optional ``build_overviews``, then ``close``.

    Attributes
    ----------
    filepath : Path
        Path where the raster will be written
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the raster sink.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path where the raster will be written
        """
        self.filepath = Path(filepath)

    @abstractmethod
    def create(
        self,
        width: int,
        height: int,
        band_count: int = 1,
        dtype: str = 'uint32',
        options: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Create the output raster resource.

        Parameters
        ----------
        width : int
            Raster width in pixels
        height : int
            Raster height in pixels
        band_count : int, default=1
            Number of bands
        dtype : str, default='uint32'
            Pixel data type
        options : Optional[Dict[str, Any]], default=None
            Format-specific creation options (compression, tiling)

        Raises
        ------
        OutputCreationError
            If the resource cannot be created
        """
        pass

    @abstractmethod
    def set_metadata(self, key: str, value: str) -> None:
        """
        Attach a descriptive metadata item.

        Parameters
        ----------
        key : str
            Metadata key (e.g. ``'TIFFTAG_SOFTWARE'``)
        value : str
            Metadata value
        """
        pass

    @abstractmethod
    def set_georeferencing(self, geo_transform: Sequence[float]) -> None:
        """
        Attach the six-parameter affine georeferencing transform.

        Parameters
        ----------
        geo_transform : Sequence[float]
            GDAL-ordered coefficients
            ``(origin_x, pixel_width, row_rotation,
            origin_y, col_rotation, pixel_height)``
        """
        pass

    @abstractmethod
    def set_spatial_reference(self, wkt: str) -> None:
        """
        Attach the spatial reference system.

        Parameters
        ----------
        wkt : str
            Well-known-text description of the CRS
        """
        pass

    @abstractmethod
    def write_band(self, data: np.ndarray, band: int = 1) -> None:
        """
        Write one full band in a single bulk operation.

        Parameters
        ----------
        data : np.ndarray
            ``(height, width)`` pixel array
        band : int, default=1
            1-based band index

        Raises
        ------
        OutputWriteError
            If the write fails or is incomplete
        """
        pass

    @abstractmethod
    def build_overviews(
        self,
        factors: Sequence[int],
        method: str = 'average'
    ) -> None:
        """
        Build reduced-resolution overview levels.

        Parameters
        ----------
        factors : Sequence[int]
            Decimation factors, e.g. ``[2, 4, 8]``
        method : str, default='average'
            Resampling method
        """
        pass

    def close(self) -> None:
        """
        Flush and close the output resource.

        Default implementation does nothing. Override if the sink
        maintains open file handles or other resources.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
