# -*- coding: utf-8 -*-
"""
Configuration - Validated run options for a density computation.

``DensityOptions`` is the already-validated configuration the pipeline
receives. It is built from command-line arguments or directly in code,
and rejects invalid values at construction with ``ConfigurationError``.

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
import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# node_density internal
from node_density.binning.ingestion import DEFAULT_CHUNK_SIZE
from node_density.exceptions import ConfigurationError
from node_density.geolocation.projection import EPSG_WEB_MERCATOR
from node_density.vocabulary import Compression

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_COMPRESSION = Compression.LZW.value


def _positive_int(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"{name} must be int, got {type(value).__name__}"
        )
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


def normalize_compression(value: str) -> str:
    """Upper-case and validate a GTiff compression identifier.

    Raises
    ------
    ConfigurationError
        If *value* is not a supported compression.
    """
    name = str(value).strip().upper()
    try:
        return Compression(name).value
    except ValueError:
        raise ConfigurationError(
            f"Unknown compression: {value!r}. "
            f"Supported: {[c.value for c in Compression]}"
        ) from None


@dataclass(frozen=True)
class DensityOptions:
    """Options for one density raster run.

    Parameters
    ----------
    input_path : Path
        Point source file.
    output_path : Path
        Output GeoTIFF path.
    input_format : str, optional
        Explicit input format hint.
    epsg : int
        EPSG code of the output projection. Default Web Mercator (3857).
    width, height : int
        Raster size in pixels. Default 1024 x 1024.
    compression : str
        GTiff compression identifier. Default ``'LZW'``.
    build_overviews : bool
        Build averaged overview levels. Default False.
    verbose : bool
        Report progress at INFO level. Default False.
    chunk_size : int
        Stream records binned per vectorized step.

    Raises
    ------
    ConfigurationError
        If any value is invalid.
    """

    input_path: Path
    output_path: Path
    input_format: Optional[str] = None
    epsg: int = EPSG_WEB_MERCATOR
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    compression: str = DEFAULT_COMPRESSION
    build_overviews: bool = False
    verbose: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        if not str(self.output_path):
            raise ConfigurationError("Output path must not be empty")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'input_path', Path(self.input_path))
        object.__setattr__(self, 'output_path', Path(self.output_path))
        object.__setattr__(self, 'compression',
                           normalize_compression(self.compression))
        if self.input_format == '':
            object.__setattr__(self, 'input_format', None)
        _positive_int(self.epsg, 'epsg')
        _positive_int(self.width, 'width')
        _positive_int(self.height, 'height')
        _positive_int(self.chunk_size, 'chunk_size')

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> 'DensityOptions':
        """Build options from parsed command-line arguments."""
        return cls(
            input_path=args.input,
            output_path=args.output,
            input_format=args.input_format,
            epsg=args.epsg,
            width=args.width,
            height=args.height,
            compression=args.compression,
            build_overviews=args.build_overview,
            verbose=args.verbose,
            chunk_size=args.chunk_size,
        )

    def describe(self) -> str:
        """Multi-line summary of the options, one per line."""
        lines = [
            "Options from command line or defaults:",
            f"  Input file:                  {self.input_path}",
        ]
        if self.input_format:
            lines.append(f"  Input format:                {self.input_format}")
        lines += [
            f"  Coordinate Reference System: {self.epsg}",
            f"  Output file:                 {self.output_path}",
            f"  Compression:                 {self.compression}",
            f"  Pixel width:                 {self.width}",
            f"  Pixel height:                {self.height}",
            f"  Build overviews:             "
            f"{'YES' if self.build_overviews else 'NO'}",
        ]
        return '\n'.join(lines)

