# -*- coding: utf-8 -*-
"""
Projection Backend Detection - Check availability of PROJ bindings.

Only EPSG codes other than 4326 and 3857 need pyproj; the two built-in
projections are evaluated with numpy alone.

Dependencies
------------
pyproj

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

# node_density internal
from node_density.exceptions import DependencyError

_HAS_PYPROJ = False

try:
    import pyproj  # noqa: F401
    _HAS_PYPROJ = True
except ImportError:
    pass


def require_proj_backend() -> None:
    """Verify that pyproj is installed.

    Raises
    ------
    DependencyError
        If pyproj is not installed.
    """
    if not _HAS_PYPROJ:
        raise DependencyError(
            "Projecting to registered EPSG codes requires pyproj. "
            "Install with: pip install pyproj"
        )
