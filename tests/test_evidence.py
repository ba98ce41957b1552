"""
test_evidence.py
Unit tests for the distance-to-evidence transform and the match rating.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from normmatch.evidence import evidence_of, rating_of
import unittest
import numpy as np

MIDPOINT = 32.0


def general_evidence(d, midpoint, curl):
    return 1.0 / (1.0 + np.power(np.asarray(d, dtype=np.float64) / midpoint, float(curl)))


class TestEvidence(unittest.TestCase):
    def test_fixed_points(self):
        for curl in (1.0, 2.0, 2.5, 3.0):
            self.assertEqual(evidence_of(0.0, MIDPOINT, curl), 1.0)
            self.assertAlmostEqual(evidence_of(MIDPOINT, MIDPOINT, curl), 0.5)
            self.assertEqual(rating_of(0.0, MIDPOINT, curl), 0.0)
            self.assertAlmostEqual(rating_of(MIDPOINT, MIDPOINT, curl), 0.5)

    def test_infinite_distance(self):
        self.assertEqual(evidence_of(float('inf'), MIDPOINT, 2.0), 0.0)
        self.assertEqual(rating_of(float('inf'), MIDPOINT, 2.5), 1.0)

    def test_rating_monotonic(self):
        d = np.linspace(0.0, 1000 * MIDPOINT, 5000)
        for curl in (0.5, 2.0, 3.0, 4.2):
            r = rating_of(d, MIDPOINT, curl)
            self.assertTrue(np.all(np.diff(r) >= 0))
            self.assertTrue(np.all((r >= 0) & (r < 1)))
        self.assertGreater(rating_of(1e9, MIDPOINT, 2.0), 0.999999)

    def test_fast_path_matches_general_power(self):
        d = np.concatenate([np.linspace(0.0, 1000 * MIDPOINT, 2001), [0.001, 0.5, 31.9, 32.1]])
        for curl in (2, 3, 2.0, 3.0):
            fast = evidence_of(d, MIDPOINT, curl)
            general = general_evidence(d, MIDPOINT, curl)
            np.testing.assert_allclose(fast, general, rtol=1e-6, atol=0)

    def test_scalar_returns_float(self):
        self.assertIsInstance(evidence_of(10.0, MIDPOINT, 2.0), float)
        self.assertIsInstance(rating_of(10, MIDPOINT, 3.0), float)

    def test_far_distance_evidence(self):
        # d = 1024 -> d / midpoint = 32 -> evidence 1 / (1 + 1024)
        self.assertAlmostEqual(evidence_of(1024.0, MIDPOINT, 2.0), 1.0 / 1025.0)
        self.assertAlmostEqual(rating_of(1024.0, MIDPOINT, 2.0), 1024.0 / 1025.0)


if __name__ == "__main__":
    unittest.main()
