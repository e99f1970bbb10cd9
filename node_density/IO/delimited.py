# -*- coding: utf-8 -*-
"""
Delimited Point Reader - Stream points from CSV/TSV text.

Each record holds one point. Columns are found by header name
(``lon``/``lng``/``longitude`` and ``lat``/``latitude``, case-insensitive);
a file whose first row is numeric is read as headerless with longitude
in the first column and latitude in the second.

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
import csv
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

# node_density internal
from node_density.geolocation.projection import GeoPoint
from node_density.IO.base import PointReader

_LON_NAMES = ('lon', 'lng', 'long', 'longitude', 'x')
_LAT_NAMES = ('lat', 'latitude', 'y')


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True


def _find_column(header: List[str], names: Tuple[str, ...], what: str) -> int:
    lowered = [h.strip().lower() for h in header]
    for name in names:
        if name in lowered:
            return lowered.index(name)
    raise ValueError(f"No {what} column in header {header}")


class DelimitedPointReader(PointReader):
    """Iterate points from a delimited text file.

    Parameters
    ----------
    filepath : str or Path
        Path to the text file.
    format : str, optional
        ``'csv'`` (comma) or ``'tsv'`` (tab). Detected from the file
        suffix when omitted.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        format: Optional[str] = None,
    ) -> None:
        super().__init__(filepath, format=format)
        fmt = (format or self.filepath.suffix.lstrip('.')).lower()
        self.delimiter = '\t' if fmt == 'tsv' else ','

    def __iter__(self) -> Iterator[GeoPoint]:
        """Yield one point per data row.

        Raises
        ------
        ValueError
            On a row with missing or non-numeric coordinates.
        """
        with open(self.filepath, newline='') as f:
            rows = csv.reader(f, delimiter=self.delimiter)
            first = next(rows, None)
            if first is None:
                return

            if len(first) >= 2 and _is_number(first[0]) \
                    and _is_number(first[1]):
                lon_col, lat_col = 0, 1
                yield self._parse(first, lon_col, lat_col, 1)
            else:
                lon_col = _find_column(first, _LON_NAMES, 'longitude')
                lat_col = _find_column(first, _LAT_NAMES, 'latitude')

            for line_no, row in enumerate(rows, start=2):
                if not row:
                    continue
                yield self._parse(row, lon_col, lat_col, line_no)

    def _parse(self, row: List[str], lon_col: int, lat_col: int,
               line_no: int) -> GeoPoint:
        try:
            return GeoPoint(float(row[lon_col]), float(row[lat_col]))
        except (IndexError, ValueError) as e:
            raise ValueError(
                f"{self.filepath}:{line_no}: malformed point record {row}"
            ) from e
