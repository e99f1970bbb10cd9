# -*- coding: utf-8 -*-
"""
GeoTIFF Sink Tests - Creation, write failures, driver and environment.

Dependencies
------------
pytest
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

import warnings

import numpy as np
import pytest

rasterio = pytest.importorskip('rasterio')
from rasterio.errors import NotGeoreferencedWarning

from node_density.exceptions import (
    EXIT_ERROR,
    EXIT_FATAL,
    DriverUnavailableError,
    OutputCreationError,
    OutputWriteError,
)
from node_density.IO import RasterEnvironment, get_sink, require_driver
from node_density.IO import _backend
from node_density.IO.geotiff import GeoTIFFSink


class TestGeoTIFFSinkCreate:

    def test_get_sink_returns_geotiff(self, tmp_path):
        sink = get_sink(tmp_path / 'out.tif')
        assert isinstance(sink, GeoTIFFSink)
        assert sink.dataset is None

    def test_create_and_close(self, tmp_path):
        path = tmp_path / 'out.tif'
        with GeoTIFFSink(path) as sink:
            sink.create(8, 4, options={'COMPRESS': 'LZW', 'tiled': True})
            assert sink.dataset is not None
        assert sink.dataset is None
        with rasterio.open(path) as src:
            assert (src.width, src.height) == (8, 4)
            assert src.dtypes[0] == 'uint32'
            assert src.compression.name.upper() == 'LZW'

    def test_create_is_not_flagged_ungeoreferenced(self, tmp_path):
        with warnings.catch_warnings():
            warnings.simplefilter('error', NotGeoreferencedWarning)
            with GeoTIFFSink(tmp_path / 'out.tif') as sink:
                sink.create(4, 4)
                sink.set_georeferencing((0.0, 1.0, 0.0, 4.0, 0.0, -1.0))

    def test_missing_directory(self, tmp_path):
        sink = GeoTIFFSink(tmp_path / 'missing' / 'out.tif')
        with pytest.raises(OutputCreationError, match="Can't create"):
            sink.create(4, 4)
        assert sink.dataset is None

    def test_creation_error_exit_code(self, tmp_path):
        sink = GeoTIFFSink(tmp_path / 'missing' / 'out.tif')
        with pytest.raises(OutputCreationError) as info:
            sink.create(4, 4)
        assert info.value.exit_code == EXIT_ERROR

    def test_setters_require_create(self, tmp_path):
        sink = GeoTIFFSink(tmp_path / 'out.tif')
        with pytest.raises(RuntimeError):
            sink.set_metadata('TIFFTAG_SOFTWARE', 'x')


class TestGeoTIFFSinkWrite:

    def test_shape_mismatch(self, tmp_path):
        with GeoTIFFSink(tmp_path / 'out.tif') as sink:
            sink.create(4, 4)
            with pytest.raises(OutputWriteError):
                sink.write_band(np.zeros((3, 4), dtype=np.uint32))

    def test_write_band_roundtrip(self, tmp_path):
        path = tmp_path / 'out.tif'
        data = np.arange(12, dtype=np.uint32).reshape(3, 4)
        with GeoTIFFSink(path) as sink:
            sink.create(4, 3)
            sink.set_georeferencing((0.0, 1.0, 0.0, 3.0, 0.0, -1.0))
            sink.write_band(data)
        with rasterio.open(path) as src:
            np.testing.assert_array_equal(src.read(1), data)
            assert src.transform.c == 0.0
            assert src.transform.f == 3.0

    def test_empty_overviews_are_skipped(self, tmp_path):
        path = tmp_path / 'out.tif'
        with GeoTIFFSink(path) as sink:
            sink.create(4, 4)
            sink.write_band(np.zeros((4, 4), dtype=np.uint32))
            sink.build_overviews([])
        with rasterio.open(path) as src:
            assert src.overviews(1) == []


class TestDriver:

    def test_gtiff_is_registered(self):
        require_driver('GTiff')

    def test_unknown_driver(self):
        with pytest.raises(DriverUnavailableError) as info:
            require_driver('NoSuchDriver')
        assert info.value.exit_code == EXIT_FATAL
        assert "Can't initialize GDAL NoSuchDriver driver." in str(info.value)

    def test_driver_checked_at_create(self, tmp_path, monkeypatch):
        monkeypatch.setattr(_backend, 'available_drivers', lambda: {})
        sink = GeoTIFFSink(tmp_path / 'out.tif')
        with pytest.raises(DriverUnavailableError):
            sink.create(4, 4)
        assert not (tmp_path / 'out.tif').exists()

    def test_driver_error_is_creation_error(self):
        assert issubclass(DriverUnavailableError, OutputCreationError)


class TestRasterEnvironment:

    def test_start_stop(self):
        env = RasterEnvironment()
        assert not env.active
        env.start()
        assert env.active
        env.stop()
        assert not env.active

    def test_start_is_idempotent(self):
        env = RasterEnvironment()
        env.start()
        first = env.env
        env.start()
        assert env.env is first
        env.stop()

    def test_stop_without_start(self):
        RasterEnvironment().stop()

    def test_context_manager(self):
        with RasterEnvironment(GDAL_CACHEMAX=64) as env:
            assert env.active
        assert not env.active
