# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""Tests for farthest-point seeding and Lloyd refinement."""

import numpy as np
import pytest

from clipsense.measure import clustering
from clipsense.measure.clustering import (
    ExtractionConfig,
    assign_pixels,
    cluster_pixels,
    compute_centroid,
    seed_centroids,
)
from clipsense.schema import RGBColor


def _two_tone(rgb1, rgb2, n1, n2):
    return np.vstack([
        np.tile(np.asarray(rgb1, dtype=np.float64), (n1, 1)),
        np.tile(np.asarray(rgb2, dtype=np.float64), (n2, 1)),
    ])


class TestConfig:

    def test_defaults(self):
        cfg = ExtractionConfig()
        assert cfg.max_samples == 5000
        assert cfg.alpha_threshold == 0.5
        assert cfg.max_iterations == 20
        assert cfg.convergence_threshold == 1.0
        assert cfg.default_max_colors == 6


class TestCentroid:

    def test_mean(self):
        points = np.array([[0.0, 0.0, 0.0], [1.0, 0.5, 0.2]])
        np.testing.assert_allclose(compute_centroid(points), [0.5, 0.25, 0.1])

    def test_empty_is_black(self):
        np.testing.assert_allclose(compute_centroid(np.empty((0, 3))), [0, 0, 0])


class TestSeeding:

    def test_first_centroid_is_first_pixel(self):
        pixels = np.array([[0.3, 0.3, 0.3], [1.0, 1.0, 1.0]])
        np.testing.assert_allclose(seed_centroids(pixels, 1), [[0.3, 0.3, 0.3]])

    def test_picks_farthest_points(self):
        pixels = np.array([
            [0.0, 0.0, 0.0],  # first seed
            [0.1, 0.1, 0.1],  # near black
            [1.0, 1.0, 1.0],  # farthest from black (3.0)
            [1.0, 0.0, 0.0],  # then farthest from {black, white}
        ])
        centroids = seed_centroids(pixels, 3)
        np.testing.assert_allclose(centroids, [
            [0.0, 0.0, 0.0],
            [1.0, 1.0, 1.0],
            [1.0, 0.0, 0.0],
        ])

    def test_uniform_input_duplicates_seed(self):
        pixels = np.tile([0.4, 0.5, 0.6], (10, 1))
        centroids = seed_centroids(pixels, 4)
        assert centroids.shape == (4, 3)
        np.testing.assert_allclose(centroids, np.tile([0.4, 0.5, 0.6], (4, 1)))

    def test_deterministic(self):
        pixels = np.random.RandomState(9).random((500, 3))
        np.testing.assert_array_equal(seed_centroids(pixels, 5), seed_centroids(pixels, 5))


class TestAssignment:

    def test_nearest_centroid(self):
        pixels = np.array([[0.0, 0.0, 0.0], [0.9, 0.9, 0.9]])
        centroids = np.array([[1.0, 1.0, 1.0], [0.1, 0.1, 0.1]])
        np.testing.assert_array_equal(assign_pixels(pixels, centroids), [1, 0])

    def test_ties_go_to_first_cluster(self):
        pixels = np.array([[0.5, 0.5, 0.5]])
        centroids = np.array([[0.5, 0.5, 0.5], [0.5, 0.5, 0.5]])
        assert assign_pixels(pixels, centroids)[0] == 0


class TestClusterPixels:

    def test_empty_input(self):
        assert cluster_pixels(np.empty((0, 3)), 3) == []

    def test_non_positive_k(self):
        pixels = np.ones((5, 3))
        assert cluster_pixels(pixels, 0) == []
        assert cluster_pixels(pixels, -2) == []

    def test_two_tone_split(self):
        pixels = _two_tone([1.0, 0.0, 0.0], [0.0, 0.0, 1.0], 30, 10)
        clusters = cluster_pixels(pixels, 2)
        assert len(clusters) == 2
        assert clusters[0].centroid == RGBColor(1.0, 0.0, 0.0)
        assert clusters[0].size == 30
        assert clusters[1].centroid == RGBColor(0.0, 0.0, 1.0)
        assert clusters[1].size == 10

    def test_surplus_clusters_stay_empty(self):
        pixels = np.tile([0.2, 0.2, 0.2], (12, 1))
        clusters = cluster_pixels(pixels, 3)
        assert len(clusters) == 3
        assert clusters[0].size == 12
        assert clusters[1].is_empty
        assert clusters[2].is_empty

    def test_points_partition_input(self):
        pixels = np.random.RandomState(4).random((300, 3))
        clusters = cluster_pixels(pixels, 4)
        assert sum(c.size for c in clusters) == 300

    def test_centroids_are_member_means(self):
        pixels = np.random.RandomState(5).random((400, 3))
        # Tight threshold so the final centroids match the final assignment
        cfg = ExtractionConfig(convergence_threshold=0.0, max_iterations=100)
        for cluster in cluster_pixels(pixels, 3, cfg):
            if not cluster.is_empty:
                mean = cluster.points.mean(axis=0)
                np.testing.assert_allclose(
                    [cluster.centroid.r, cluster.centroid.g, cluster.centroid.b],
                    mean,
                    atol=1e-9,
                )

    def test_stops_when_centroids_settle(self, monkeypatch):
        calls = []
        original = clustering.assign_pixels

        def counting(pixels, centroids):
            calls.append(1)
            return original(pixels, centroids)

        monkeypatch.setattr(clustering, "assign_pixels", counting)
        # Seeds land exactly on the two colors, so nothing moves
        cluster_pixels(_two_tone([1, 1, 1], [0, 0, 0], 5, 5), 2)
        assert len(calls) == 1

    def test_iteration_cap(self, monkeypatch):
        calls = []
        original = clustering.assign_pixels

        def counting(pixels, centroids):
            calls.append(1)
            return original(pixels, centroids)

        monkeypatch.setattr(clustering, "assign_pixels", counting)
        cfg = ExtractionConfig(max_iterations=3, convergence_threshold=-1.0)
        cluster_pixels(np.random.RandomState(6).random((50, 3)), 3, cfg)
        assert len(calls) == 3

    def test_default_cap_is_twenty(self, monkeypatch):
        calls = []
        original = clustering.assign_pixels

        def counting(pixels, centroids):
            calls.append(1)
            return original(pixels, centroids)

        monkeypatch.setattr(clustering, "assign_pixels", counting)
        cfg = ExtractionConfig(convergence_threshold=-1.0)
        cluster_pixels(np.random.RandomState(8).random((50, 3)), 2, cfg)
        assert len(calls) == 20
