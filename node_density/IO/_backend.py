# -*- coding: utf-8 -*-
"""
Raster Backend - rasterio/GDAL availability and process-wide environment.

GDAL driver registration is process-wide state. ``RasterEnvironment``
gives it an explicit start/stop lifecycle that brackets the command-line
entry point, and ``require_driver`` checks for a registered driver at the
moment output is about to be written.

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
import logging
from contextlib import ExitStack
from typing import Any, Dict, Optional

# node_density internal
from node_density.exceptions import DependencyError, DriverUnavailableError

logger = logging.getLogger(__name__)

_HAS_RASTERIO = False

try:
    import rasterio
    _HAS_RASTERIO = True
except ImportError:
    pass


def require_raster_backend() -> None:
    """Verify that rasterio is installed.

    Raises
    ------
    DependencyError
        If rasterio is not installed.
    """
    if not _HAS_RASTERIO:
        raise DependencyError(
            "Writing raster output requires rasterio. "
            "Install with: pip install rasterio"
        )


def available_drivers() -> Dict[str, str]:
    """Map of registered GDAL driver short names to descriptions."""
    require_raster_backend()
    with rasterio.Env() as env:
        return env.drivers()


def require_driver(name: str = 'GTiff') -> None:
    """Verify that a GDAL raster driver is registered.

    Parameters
    ----------
    name : str
        GDAL driver short name.

    Raises
    ------
    DriverUnavailableError
        If the driver is not registered.
    """
    if name not in available_drivers():
        raise DriverUnavailableError(f"Can't initialize GDAL {name} driver.")


class RasterEnvironment:
    """Process-wide GDAL environment with an explicit lifecycle.

    Parameters
    ----------
    **options
        GDAL configuration options passed to ``rasterio.Env``.

    Examples
    --------
    >>> env = RasterEnvironment()
    >>> env.start()
    >>> try:
    ...     run(options)
    ... finally:
    ...     env.stop()
    """

    def __init__(self, **options: Any) -> None:
        self._options = options
        self._stack: Optional[ExitStack] = None
        self.env = None

    @property
    def active(self) -> bool:
        return self._stack is not None

    def start(self) -> None:
        """Register drivers and enter the GDAL environment."""
        if self.active:
            return
        require_raster_backend()
        stack = ExitStack()
        self.env = stack.enter_context(rasterio.Env(**self._options))
        self._stack = stack
        logger.debug("GDAL environment started")

    def stop(self) -> None:
        """Leave the GDAL environment."""
        if self._stack is None:
            return
        self._stack.close()
        self._stack = None
        self.env = None
        logger.debug("GDAL environment stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
