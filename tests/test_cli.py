# -*- coding: utf-8 -*-
"""
Command-Line Tests - End-to-end runs and exit status per failure class.

Dependencies
------------
pytest
rasterio

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

import logging

import numpy as np
import pytest

rasterio = pytest.importorskip('rasterio')
from rasterio.errors import NotGeoreferencedWarning

from node_density.cli import main
from node_density.exceptions import (
    EXIT_CONFIGURATION,
    EXIT_ERROR,
    EXIT_FATAL,
    EXIT_OK,
)
from node_density.IO import _backend


@pytest.fixture
def points_csv(tmp_path):
    path = tmp_path / 'points.csv'
    path.write_text(
        "lon,lat\n"
        "-90,45\n"
        "90,45\n"
        "-90,-45\n"
        "90,-45\n"
        "90,-45\n"
        "0,89.9\n"
    )
    return path


class TestMain:

    def test_success(self, points_csv, tmp_path):
        out = tmp_path / 'density.tif'
        status = main([str(points_csv), '-o', str(out), '-W', '2', '-H', '2'])
        assert status == EXIT_OK
        with rasterio.open(out) as src:
            np.testing.assert_array_equal(src.read(1), [[1, 1], [1, 2]])
            assert src.tags()['TIFFTAG_SOFTWARE'] == 'node_density'

    def test_geographic(self, points_csv, tmp_path):
        out = tmp_path / 'density.tif'
        status = main([str(points_csv), '-o', str(out), '-e', '4326',
                       '-W', '4', '-H', '2', '-c', 'deflate'])
        assert status == EXIT_OK
        with rasterio.open(out) as src:
            grid = src.read(1)
            assert int(grid.sum()) == 6
            assert src.transform.a == pytest.approx(90.0)

    def test_overviews(self, points_csv, tmp_path):
        out = tmp_path / 'density.tif'
        status = main([str(points_csv), '-o', str(out),
                       '-W', '1024', '-H', '64', '-b'])
        assert status == EXIT_OK
        with rasterio.open(out) as src:
            assert src.overviews(1) == [2, 4]

    def test_bad_compression(self, points_csv, tmp_path):
        status = main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
                       '-c', 'GIF'])
        assert status == EXIT_CONFIGURATION

    def test_bad_width(self, points_csv, tmp_path):
        status = main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
                       '-W', '0'])
        assert status == EXIT_CONFIGURATION

    def test_unknown_epsg(self, points_csv, tmp_path):
        pytest.importorskip('pyproj')
        status = main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
                       '-e', '999999'])
        assert status == EXIT_CONFIGURATION

    def test_unwritable_output(self, points_csv, tmp_path):
        out = tmp_path / 'missing' / 'density.tif'
        status = main([str(points_csv), '-o', str(out)])
        assert status == EXIT_ERROR
        assert not out.exists()

    def test_driver_unavailable(self, points_csv, tmp_path, monkeypatch):
        monkeypatch.setattr(_backend, 'available_drivers', lambda: {})
        status = main([str(points_csv), '-o', str(tmp_path / 'o.tif')])
        assert status == EXIT_FATAL

    def test_error_message(self, points_csv, tmp_path, caplog):
        out = tmp_path / 'missing' / 'density.tif'
        main([str(points_csv), '-o', str(out)])
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Can't create output file" in errors[0].getMessage()

    def test_verbose_progress(self, points_csv, tmp_path, caplog):
        main([str(points_csv), '-o', str(tmp_path / 'o.tif'), '-v',
              '-W', '8', '-H', '8'])
        assert "Options from command line or defaults:" in caplog.text
        assert "Counting nodes..." in caplog.text
        assert "Writing image to output file..." in caplog.text

    def test_quiet_by_default(self, points_csv, tmp_path, caplog):
        main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
              '-W', '8', '-H', '8'])
        assert "Counting nodes..." not in caplog.text

    def test_success_writes_nothing_to_stderr(self, points_csv, tmp_path,
                                              capfd):
        status = main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
                       '-W', '8', '-H', '8'])
        assert status == EXIT_OK
        out, err = capfd.readouterr()
        assert err == ''

    def test_success_raises_no_warnings(self, points_csv, tmp_path, recwarn):
        status = main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
                       '-W', '8', '-H', '8'])
        assert status == EXIT_OK
        assert not [w for w in recwarn
                    if issubclass(w.category, NotGeoreferencedWarning)]

    def test_verbose_option_controls_logging(self, points_csv, tmp_path):
        main([str(points_csv), '-o', str(tmp_path / 'o.tif'), '-v',
              '-W', '8', '-H', '8'])
        assert logging.getLogger('node_density').level == logging.INFO
        main([str(points_csv), '-o', str(tmp_path / 'o.tif'),
              '-W', '8', '-H', '8'])
        assert logging.getLogger('node_density').level == logging.WARNING

    def test_output_required(self, points_csv):
        with pytest.raises(SystemExit):
            main([str(points_csv)])
