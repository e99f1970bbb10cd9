# -*- coding: utf-8 -*-
"""
Node Density Exception Hierarchy - Domain-specific exceptions.

Provides a small exception hierarchy that lets callers (the command-line
front end in particular) catch density-raster errors distinctly from
Python built-in exceptions. All exceptions subclass both ``DensityError``
and the appropriate built-in exception for backward compatibility.

Fatal classes carry an ``exit_code`` so the process can terminate with a
status that identifies the failure class.

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

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FATAL = 2
EXIT_CONFIGURATION = 3


class DensityError(Exception):
    """Base exception for all node density errors."""

    exit_code = EXIT_ERROR


class ConfigurationError(DensityError, ValueError):
    """Invalid configuration or unrecognized coordinate reference system.

    Raised before ingestion starts for non-positive raster dimensions,
    unknown compression identifiers, unknown EPSG codes, and projected
    extents that collapse to zero width or height.
    """

    exit_code = EXIT_CONFIGURATION


class DependencyError(DensityError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a module requires an optional package (rasterio,
    pyproj, osmium) that is not installed.
    """

    exit_code = EXIT_FATAL


class OutputCreationError(DensityError, IOError):
    """The output raster could not be created.

    Raised after ingestion has completed, when the target file cannot be
    opened for writing.
    """


class DriverUnavailableError(OutputCreationError):
    """The raster driver needed for the output format is not registered."""

    exit_code = EXIT_FATAL


class OutputWriteError(DensityError, IOError):
    """The bulk band write to the output raster failed."""
