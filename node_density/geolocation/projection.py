# -*- coding: utf-8 -*-
"""
Projection - Geographic to planar coordinate transforms.

Provides ``Projector``, which maps WGS84 longitude/latitude in degrees to
planar coordinates of a coordinate reference system identified by an EPSG
code, together with the small value types the binning pipeline passes
around (``GeoPoint``, ``BoundingBox``, ``ProjectedExtent``).

Coordinate flow:

    WGS84 (lon, lat)  --projector-->  planar (x, y)  --indexer-->  pixel (col, row)

Two projections are evaluated directly with numpy: plain geographic
coordinates (EPSG:4326, a pass-through) and spherical Web Mercator
(EPSG:3857). Any other registered EPSG code is delegated to PROJ through
pyproj.

Dependencies
------------
numpy
pyproj (only for EPSG codes other than 4326 and 3857)

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
from dataclasses import dataclass
from typing import Any, NamedTuple, Tuple

# Third-party
import numpy as np

# node_density internal
from node_density.exceptions import ConfigurationError
from node_density.geolocation._backend import require_proj_backend
from node_density.vocabulary import ProjectionKind

EPSG_WGS84 = 4326
EPSG_WEB_MERCATOR = 3857

# Latitude at which the spherical Mercator square closes.
MERCATOR_MAX_LAT = 85.0511288
EARTH_RADIUS_FOR_EPSG3857 = 6378137.0

GEOGRAPHIC_PROJ_STRING = '+proj=longlat +datum=WGS84 +no_defs'
WEB_MERCATOR_PROJ_STRING = (
    '+proj=merc +a=6378137 +b=6378137 +lat_ts=0 +lon_0=0 '
    '+x_0=0 +y_0=0 +k=1 +units=m +no_defs'
)


class GeoPoint(NamedTuple):
    """A geographic point in degrees."""

    lon: float
    lat: float


class Coordinates(NamedTuple):
    """A planar point in projection units."""

    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned geographic box used as the analysis extent.

    Parameters
    ----------
    bottom_left : GeoPoint
        Minimum longitude and latitude.
    top_right : GeoPoint
        Maximum longitude and latitude.

    Raises
    ------
    ConfigurationError
        If the box has zero or negative width or height.
    """

    bottom_left: GeoPoint
    top_right: GeoPoint

    def __post_init__(self) -> None:
        if not (self.top_right.lon > self.bottom_left.lon
                and self.top_right.lat > self.bottom_left.lat):
            raise ConfigurationError(
                f"Degenerate bounding box: {self.bottom_left} to "
                f"{self.top_right}"
            )

    @classmethod
    def for_epsg(cls, epsg: int) -> 'BoundingBox':
        """Working extent for a coordinate reference system.

        Web Mercator is limited to the latitudes where the projection is
        defined. Every other code gets the whole longitude/latitude range,
        whatever that projection's own valid domain is.

        Parameters
        ----------
        epsg : int
            EPSG code of the target projection.

        Returns
        -------
        BoundingBox
        """
        if epsg == EPSG_WEB_MERCATOR:
            return cls(GeoPoint(-180.0, -MERCATOR_MAX_LAT),
                       GeoPoint(180.0, MERCATOR_MAX_LAT))
        return cls(GeoPoint(-180.0, -90.0), GeoPoint(180.0, 90.0))

    def contains(self, point: GeoPoint) -> bool:
        """Inclusive containment test for a single point."""
        return (self.bottom_left.lon <= point.lon <= self.top_right.lon
                and self.bottom_left.lat <= point.lat <= self.top_right.lat)

    def contains_array(self, lons: np.ndarray, lats: np.ndarray) -> np.ndarray:
        """Vectorized inclusive containment test.

        Parameters
        ----------
        lons, lats : np.ndarray
            1D coordinate arrays in degrees.

        Returns
        -------
        np.ndarray
            Boolean mask, True where the point lies inside the box.
        """
        return ((lons >= self.bottom_left.lon) & (lons <= self.top_right.lon)
                & (lats >= self.bottom_left.lat) & (lats <= self.top_right.lat))


@dataclass(frozen=True)
class ProjectedExtent:
    """The two corners of a ``BoundingBox`` after projection.

    Raises
    ------
    ConfigurationError
        If a corner is not finite or the extent is not strictly positive
        in both directions.
    """

    bottom_left: Coordinates
    top_right: Coordinates

    def __post_init__(self) -> None:
        corners = (*self.bottom_left, *self.top_right)
        if not all(np.isfinite(corners)):
            raise ConfigurationError(
                f"Projected extent is not finite: {self.bottom_left} to "
                f"{self.top_right}"
            )
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Projected extent is degenerate: {self.bottom_left} to "
                f"{self.top_right}"
            )

    @property
    def width(self) -> float:
        return self.top_right.x - self.bottom_left.x

    @property
    def height(self) -> float:
        return self.top_right.y - self.bottom_left.y

    @classmethod
    def from_box(cls, box: BoundingBox,
                 projector: 'Projector') -> 'ProjectedExtent':
        """Project both corners of *box*."""
        bottom_left = Coordinates(*(float(v) for v in projector.project(
            box.bottom_left.lon, box.bottom_left.lat)))
        top_right = Coordinates(*(float(v) for v in projector.project(
            box.top_right.lon, box.top_right.lat)))
        return cls(bottom_left, top_right)


def _lon_to_x(lon: Any) -> Any:
    return EARTH_RADIUS_FOR_EPSG3857 * np.deg2rad(lon)


def _lat_to_y(lat: Any) -> Any:
    return EARTH_RADIUS_FOR_EPSG3857 * np.log(
        np.tan(np.pi / 4 + np.deg2rad(lat) / 2)
    )


def _x_to_lon(x: Any) -> Any:
    return np.rad2deg(x / EARTH_RADIUS_FOR_EPSG3857)


def _y_to_lat(y: Any) -> Any:
    return np.rad2deg(
        2 * np.arctan(np.exp(y / EARTH_RADIUS_FOR_EPSG3857)) - np.pi / 2
    )


class Projector:
    """Map WGS84 longitude/latitude to a planar CRS.

    The projector is a pure function of its inputs once constructed: it
    holds no mutable state, and projecting the same point twice gives
    bit-identical results. Inputs may be Python scalars or 1D numpy
    arrays; outputs follow the inputs.

    Parameters
    ----------
    epsg : int
        EPSG code of the target coordinate reference system.

    Attributes
    ----------
    epsg : int
        The EPSG code as provided.
    kind : ProjectionKind
        Which projection variant is in use.
    description : str
        PROJ-style description of the target CRS, used to build the
        spatial reference of the output raster.

    Raises
    ------
    ConfigurationError
        If the EPSG code is not recognized.
    DependencyError
        If the code needs pyproj and pyproj is not installed.

    Examples
    --------
    >>> projector = Projector(3857)
    >>> x, y = projector.project(0.0, 0.0)
    >>> (float(x), float(y))
    (0.0, 0.0)
    """

    def __init__(self, epsg: int) -> None:
        self.epsg = int(epsg)
        self._to_crs = None
        self._from_crs = None

        if self.epsg == EPSG_WGS84:
            self.kind = ProjectionKind.GEOGRAPHIC
            self.description = GEOGRAPHIC_PROJ_STRING
        elif self.epsg == EPSG_WEB_MERCATOR:
            self.kind = ProjectionKind.WEB_MERCATOR
            self.description = WEB_MERCATOR_PROJ_STRING
        else:
            require_proj_backend()
            import pyproj
            from pyproj.exceptions import CRSError

            try:
                target = pyproj.CRS.from_epsg(self.epsg)
            except CRSError as e:
                raise ConfigurationError(
                    f"Unrecognized coordinate reference system: "
                    f"EPSG:{self.epsg}"
                ) from e

            wgs84 = pyproj.CRS.from_epsg(EPSG_WGS84)
            # always_xy keeps (lon, lat) / (x, y) ordering on both sides
            self._to_crs = pyproj.Transformer.from_crs(
                wgs84, target, always_xy=True
            )
            self._from_crs = pyproj.Transformer.from_crs(
                target, wgs84, always_xy=True
            )
            self.kind = ProjectionKind.PROJ
            self.description = f'EPSG:{self.epsg}'

    def __repr__(self) -> str:
        return f"Projector(epsg={self.epsg}, kind={self.kind.value})"

    def project(self, lon: Any, lat: Any) -> Tuple[Any, Any]:
        """Project geographic coordinates to planar coordinates.

        Parameters
        ----------
        lon, lat : float or np.ndarray
            Longitude and latitude in degrees.

        Returns
        -------
        Tuple
            ``(x, y)`` in projection units.
        """
        if self.kind is ProjectionKind.GEOGRAPHIC:
            return lon, lat
        if self.kind is ProjectionKind.WEB_MERCATOR:
            return _lon_to_x(lon), _lat_to_y(lat)
        return self._to_crs.transform(lon, lat)

    def unproject(self, x: Any, y: Any) -> Tuple[Any, Any]:
        """Inverse of :meth:`project`.

        Parameters
        ----------
        x, y : float or np.ndarray
            Planar coordinates in projection units.

        Returns
        -------
        Tuple
            ``(lon, lat)`` in degrees.
        """
        if self.kind is ProjectionKind.GEOGRAPHIC:
            return x, y
        if self.kind is ProjectionKind.WEB_MERCATOR:
            return _x_to_lon(x), _y_to_lat(y)
        return self._from_crs.transform(x, y)
