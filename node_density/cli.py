# -*- coding: utf-8 -*-
"""
Command-Line Interface - Compute a node density GeoTIFF from an OSM file.

Usage:

    node-density planet.osm.pbf -o density.tif -W 4096 -H 4096 -b -v

Exit status is 0 on success; a failure prints one diagnostic line to
stderr and exits with the status of its error class (1 for output
creation or write errors, 2 when the GTiff driver is unavailable, 3 for
invalid configuration).

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
import logging
import sys
from pathlib import Path
from typing import List, Optional

# node_density internal
from node_density import pipeline
from node_density.binning.ingestion import DEFAULT_CHUNK_SIZE
from node_density.config import (
    DEFAULT_COMPRESSION,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DensityOptions,
)
from node_density.exceptions import EXIT_OK, DensityError
from node_density.geolocation.projection import EPSG_WEB_MERCATOR
from node_density.IO import RasterEnvironment

logger = logging.getLogger('node_density')


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='node-density',
        description=(
            "Count the nodes of an OSM file per pixel and write the "
            "result as a georeferenced GeoTIFF."
        ),
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input file (OSM PBF/XML/OPL/O5M, or CSV of lon,lat).",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        required=True,
        help="Output GeoTIFF file.",
    )
    parser.add_argument(
        "-f", "--input-format",
        default=None,
        help="Input format hint (e.g. pbf, xml, opl, csv).",
    )
    parser.add_argument(
        "-e", "--epsg",
        type=int,
        default=EPSG_WEB_MERCATOR,
        help=f"EPSG code of the output projection "
             f"(default: {EPSG_WEB_MERCATOR}).",
    )
    parser.add_argument(
        "-W", "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH}).",
    )
    parser.add_argument(
        "-H", "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT}).",
    )
    parser.add_argument(
        "-c", "--compression",
        default=DEFAULT_COMPRESSION,
        help=f"GeoTIFF compression (default: {DEFAULT_COMPRESSION}).",
    )
    parser.add_argument(
        "-b", "--build-overview",
        action="store_true",
        help="Build overview levels.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report progress.",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Records binned per step (default: {DEFAULT_CHUNK_SIZE}).",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stderr,
        format="%(message)s",
    )
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command-line tool.

    Parameters
    ----------
    argv : List[str], optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit status.
    """
    args = build_parser().parse_args(argv)
    # Quiet until the options are validated
    _configure_logging(verbose=False)

    environment = RasterEnvironment()
    try:
        environment.start()
        options = DensityOptions.from_namespace(args)
        _configure_logging(options.verbose)
        logger.info(options.describe())
        pipeline.run(options)
    except DensityError as e:
        logger.error("%s", e)
        return e.exit_code
    finally:
        environment.stop()
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
