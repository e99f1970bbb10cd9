# -*- coding: utf-8 -*-
"""
GeoTIFF Sink - Write single-band count rasters as GeoTIFF.

Implements the ``RasterSink`` write contract on top of rasterio (GDAL's
GTiff driver): create, metadata tags, affine georeferencing, spatial
reference, bulk band write, averaged overviews and close.

Dependencies
------------
rasterio

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
import warnings
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

# Third-party
import numpy as np

try:
    import rasterio
    from rasterio.crs import CRS
    from rasterio.enums import Resampling
    from rasterio.errors import NotGeoreferencedWarning
    from rasterio.transform import Affine
except ImportError:
    pass

# node_density internal
from node_density.exceptions import OutputCreationError, OutputWriteError
from node_density.IO._backend import require_driver, require_raster_backend
from node_density.IO.base import RasterSink


class GeoTIFFSink(RasterSink):
    """Write a raster to a GeoTIFF file.

    Parameters
    ----------
    filepath : str or Path
        Output GeoTIFF path.

    Attributes
    ----------
    filepath : Path
        Output file path.
    dataset : rasterio.io.DatasetWriter or None
        Open rasterio dataset between ``create`` and ``close``.

    Raises
    ------
    DependencyError
        If rasterio is not installed.

    Examples
    --------
    >>> from node_density.IO.geotiff import GeoTIFFSink
    >>> with GeoTIFFSink('density.tif') as sink:
    ...     sink.create(1024, 1024, options={'compress': 'LZW'})
    ...     sink.write_band(counts)
    """

    driver = 'GTiff'

    def __init__(self, filepath: Union[str, Path]) -> None:
        require_raster_backend()
        super().__init__(filepath)
        self.dataset = None

    def _require_open(self) -> None:
        if self.dataset is None:
            raise RuntimeError(
                f"GeoTIFF sink for '{self.filepath}' has not been created"
            )

    def create(
        self,
        width: int,
        height: int,
        band_count: int = 1,
        dtype: str = 'uint32',
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Create the GeoTIFF file.

        Parameters
        ----------
        width, height : int
            Raster size in pixels.
        band_count : int
            Number of bands.
        dtype : str
            Pixel data type.
        options : Dict[str, Any], optional
            GTiff creation options such as ``compress`` and ``tiled``.

        Raises
        ------
        DriverUnavailableError
            If the GTiff driver is not registered.
        OutputCreationError
            If the file cannot be created.
        """
        require_driver(self.driver)
        creation = {k.lower(): v for k, v in (options or {}).items()}
        try:
            # Georeferencing is attached after creation
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", NotGeoreferencedWarning)
                self.dataset = rasterio.open(
                    str(self.filepath), 'w',
                    driver=self.driver,
                    width=width,
                    height=height,
                    count=band_count,
                    dtype=dtype,
                    **creation,
                )
        except Exception as e:
            raise OutputCreationError(
                f"Can't create output file '{self.filepath}'."
            ) from e

    def set_metadata(self, key: str, value: str) -> None:
        """Set a metadata item in the default domain."""
        self._require_open()
        self.dataset.update_tags(**{key: value})

    def set_georeferencing(self, geo_transform: Sequence[float]) -> None:
        """Set the GDAL-ordered six-parameter transform."""
        self._require_open()
        self.dataset.transform = Affine.from_gdal(*geo_transform)

    def set_spatial_reference(self, wkt: str) -> None:
        """Set the CRS from well-known text."""
        self._require_open()
        self.dataset.crs = CRS.from_wkt(wkt)

    def write_band(self, data: np.ndarray, band: int = 1) -> None:
        """Write a whole band.

        Raises
        ------
        OutputWriteError
            If *data* does not match the raster size or GDAL reports an
            error.
        """
        self._require_open()
        expected = (self.dataset.height, self.dataset.width)
        if data.shape != expected:
            raise OutputWriteError(
                f"Band data shape {data.shape} does not match raster "
                f"shape {expected} for '{self.filepath}'."
            )
        try:
            self.dataset.write(data, band)
        except Exception as e:
            raise OutputWriteError(
                f"Error writing to output file '{self.filepath}'."
            ) from e

    def build_overviews(
        self,
        factors: Sequence[int],
        method: str = 'average',
    ) -> None:
        """Build internal overviews at the given decimation factors."""
        self._require_open()
        if not factors:
            return
        self.dataset.build_overviews(list(factors), Resampling[method])
        self.dataset.update_tags(ns='rio_overview', resampling=method)

    def close(self) -> None:
        """Flush and close the rasterio dataset."""
        if self.dataset is not None:
            self.dataset.close()
            self.dataset = None
