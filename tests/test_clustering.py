import unittest
from dataclasses import dataclass

from chemlab.clustering import build_clusters, centroid


@dataclass
class Point:
    name: str
    position: tuple


def names(clusters):
    return [[p.name for p in cluster] for cluster in clusters]


class TestClustering(unittest.TestCase):
    def test_boundary_is_inclusive(self):
        points = [Point("a", (0.0, 0.0)), Point("b", (30.0, 40.0))]
        self.assertEqual(names(build_clusters(points, 50.0)), [["a", "b"]])

    def test_just_beyond_threshold_splits(self):
        points = [Point("a", (0.0, 0.0)), Point("b", (50.0 + 1e-6, 0.0))]
        self.assertEqual(names(build_clusters(points, 50.0)), [["a"], ["b"]])

    def test_chains_are_connected(self):
        # a-b and b-c are close, a-c is not.
        points = [
            Point("a", (0.0, 0.0)),
            Point("c", (80.0, 0.0)),
            Point("b", (40.0, 0.0)),
            Point("d", (500.0, 500.0)),
        ]
        self.assertEqual(names(build_clusters(points, 50.0)), [["a", "b", "c"], ["d"]])

    def test_every_item_in_exactly_one_cluster(self):
        points = [Point(str(i), (float(i * 30 % 170), float(i * 70 % 130))) for i in range(12)]
        clusters = build_clusters(points, 45.0)
        flattened = [p.name for cluster in clusters for p in cluster]
        self.assertEqual(sorted(flattened), sorted(p.name for p in points))
        self.assertTrue(all(cluster for cluster in clusters))

    def test_idempotent_on_static_input(self):
        points = [Point(str(i), (float(i * 13 % 97), float(i * 29 % 61))) for i in range(10)]
        self.assertEqual(
            names(build_clusters(points, 25.0)), names(build_clusters(points, 25.0))
        )

    def test_empty_and_single(self):
        self.assertEqual(build_clusters([], 10.0), [])
        self.assertEqual(names(build_clusters([Point("a", (1.0, 1.0))], 10.0)), [["a"]])

    def test_threshold_must_be_positive(self):
        with self.assertRaises(ValueError):
            build_clusters([Point("a", (0.0, 0.0))], 0.0)

    def test_centroid(self):
        points = [Point("a", (0.0, 0.0)), Point("b", (10.0, 0.0)), Point("c", (5.0, 15.0))]
        self.assertEqual(centroid(points), (5.0, 5.0))
        with self.assertRaises(ValueError):
            centroid([])


if __name__ == '__main__':
    unittest.main()
