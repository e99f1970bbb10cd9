# -*- coding: utf-8 -*-
"""
Ingestion Loop Tests - Streaming points into the density grid.

Covers containment filtering, the Mercator latitude boundary, the
quadrant scenario, conservation of counts, order independence and
chunking.

Dependencies
------------
pytest

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

from node_density.binning import (
    DensityAccumulator,
    GridIndexer,
    IngestionLoop,
)
from node_density.geolocation import (
    MERCATOR_MAX_LAT,
    BoundingBox,
    GeoPoint,
    ProjectedExtent,
    Projector,
)


def make_loop(epsg=3857, width=2, height=2, chunk_size=65536):
    projector = Projector(epsg)
    box = BoundingBox.for_epsg(epsg)
    extent = ProjectedExtent.from_box(box, projector)
    indexer = GridIndexer(extent, width, height)
    accumulator = DensityAccumulator(width, height)
    return IngestionLoop(box, projector, indexer, accumulator,
                         chunk_size=chunk_size)


def uniform_points(n, seed=0, max_lat=85.0):
    rng = np.random.default_rng(seed)
    lons = rng.uniform(-180.0, 180.0, n)
    lats = rng.uniform(-max_lat, max_lat, n)
    return [GeoPoint(float(lo), float(la)) for lo, la in zip(lons, lats)]


QUADRANT_CENTERS = [
    GeoPoint(-90.0, 45.0),
    GeoPoint(90.0, 45.0),
    GeoPoint(-90.0, -45.0),
    GeoPoint(90.0, -45.0),
]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:

    def test_shape_mismatch_raises(self):
        projector = Projector(4326)
        box = BoundingBox.for_epsg(4326)
        extent = ProjectedExtent.from_box(box, projector)
        with pytest.raises(ValueError, match="does not match"):
            IngestionLoop(box, projector, GridIndexer(extent, 4, 4),
                          DensityAccumulator(4, 2))

    def test_bad_chunk_size_raises(self):
        with pytest.raises(ValueError, match="chunk_size"):
            make_loop(chunk_size=0)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:

    @pytest.mark.parametrize('epsg', [3857, 4326])
    def test_one_point_per_quadrant(self, epsg):
        loop = make_loop(epsg=epsg)
        stats = loop.run(QUADRANT_CENTERS)
        assert stats.accepted == 4
        assert loop.accumulator.grid.tolist() == [[1, 1], [1, 1]]

    def test_quadrant_orientation(self):
        loop = make_loop()
        loop.run([GeoPoint(90.0, 45.0)])
        assert loop.accumulator.grid.tolist() == [[0, 1], [0, 0]]

    def test_ten_thousand_points_conserved(self):
        loop = make_loop(width=64, height=64)
        stats = loop.run(uniform_points(10000))
        assert stats.seen == 10000
        assert stats.accepted == 10000
        assert stats.discarded == 0
        assert loop.accumulator.total() == 10000

    def test_empty_stream(self):
        loop = make_loop()
        stats = loop.run(iter([]))
        assert stats.seen == 0
        assert loop.accumulator.total() == 0


class TestMercatorBoundary:
    """Points at and beyond the projection's valid latitude."""

    def test_max_latitude_accepted_in_row_zero(self):
        loop = make_loop(width=8, height=8)
        stats = loop.run([GeoPoint(10.0, MERCATOR_MAX_LAT)])
        assert stats.accepted == 1
        assert loop.accumulator.grid[0].sum() == 1

    def test_min_latitude_accepted_in_last_row(self):
        loop = make_loop(width=8, height=8)
        loop.run([GeoPoint(10.0, -MERCATOR_MAX_LAT)])
        assert loop.accumulator.grid[7].sum() == 1

    def test_beyond_max_latitude_discarded(self):
        loop = make_loop(width=8, height=8)
        stats = loop.run([GeoPoint(10.0, 85.06), GeoPoint(10.0, -90.0)])
        assert stats.accepted == 0
        assert stats.discarded == 2
        assert loop.accumulator.total() == 0

    def test_single_point_path_agrees(self):
        loop = make_loop(width=8, height=8)
        assert loop.ingest_point(GeoPoint(10.0, MERCATOR_MAX_LAT))
        assert not loop.ingest_point(GeoPoint(10.0, 85.06))
        assert loop.accumulator.grid[0].sum() == 1


# ---------------------------------------------------------------------------
# Order independence and chunking
# ---------------------------------------------------------------------------

class TestOrderIndependence:

    def test_shuffled_stream_same_grid(self):
        points = uniform_points(2000, seed=5)
        shuffled = list(points)
        np.random.default_rng(9).shuffle(shuffled)

        a = make_loop(width=16, height=16)
        b = make_loop(width=16, height=16)
        a.run(points)
        b.run(shuffled)
        np.testing.assert_array_equal(a.accumulator.grid,
                                      b.accumulator.grid)

    @pytest.mark.parametrize('chunk_size', [1, 7, 1000, 5000])
    def test_chunk_size_does_not_change_result(self, chunk_size):
        points = uniform_points(3000, seed=2, max_lat=89.0)
        reference = make_loop(width=32, height=16)
        reference.run(points)

        loop = make_loop(width=32, height=16, chunk_size=chunk_size)
        stats = loop.run(points)
        assert stats.accepted == reference.accumulator.total()
        np.testing.assert_array_equal(loop.accumulator.grid,
                                      reference.accumulator.grid)

    def test_chunked_matches_point_by_point(self):
        points = uniform_points(500, seed=4, max_lat=89.0)
        chunked = make_loop(width=10, height=10)
        chunked.run(points)

        single = make_loop(width=10, height=10)
        for point in points:
            single.ingest_point(point)
        np.testing.assert_array_equal(chunked.accumulator.grid,
                                      single.accumulator.grid)

    def test_sharded_merge_equals_single_pass(self):
        points = uniform_points(1200, seed=8)
        whole = make_loop(width=12, height=12)
        whole.run(points)

        shards = [make_loop(width=12, height=12) for _ in range(3)]
        for i, shard in enumerate(shards):
            shard.run(points[i::3])
        merged = shards[0].accumulator
        for shard in shards[1:]:
            merged.merge(shard.accumulator)
        np.testing.assert_array_equal(merged.grid, whole.accumulator.grid)


class TestProgress:

    def test_progress_callback_per_chunk(self):
        seen = []
        loop = make_loop(chunk_size=100)
        loop.run(uniform_points(250), progress_callback=seen.append)
        assert seen == [100, 200, 250]

    def test_summary_logged(self, caplog):
        caplog.set_level(logging.INFO, logger='node_density')
        loop = make_loop()
        loop.run(QUADRANT_CENTERS + [GeoPoint(0.0, 89.0)])
        assert "Counted 4 of 5 points (1 outside extent)" in caplog.text

    def test_accepts_plain_tuples(self):
        loop = make_loop()
        stats = loop.run([(-90.0, 45.0), (90.0, -45.0)])
        assert stats.accepted == 2

    @pytest.mark.parametrize('epsg', [3857, 4326])
    def test_records_with_extra_fields(self, epsg):
        """Fields after lon/lat (ids, timestamps) are ignored."""
        loop = make_loop(epsg)
        records = [(p.lon, p.lat, node_id)
                   for node_id, p in enumerate(QUADRANT_CENTERS, start=1)]
        stats = loop.run(records)
        assert (stats.seen, stats.accepted, stats.discarded) == (4, 4, 0)
        assert loop.accumulator.grid.tolist() == [[1, 1], [1, 1]]

    def test_records_with_extra_fields_across_chunks(self):
        loop = make_loop(chunk_size=3)
        records = [(p.lon, p.lat, 7, 'tag') for p in QUADRANT_CENTERS * 2]
        stats = loop.run(records)
        assert stats.accepted == stats.seen == 8
        assert loop.accumulator.grid.tolist() == [[2, 2], [2, 2]]
