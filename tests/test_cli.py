"""
test_cli.py
Integration tests for the normmatch command line tool and the rating curve plot.
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))
import matplotlib
matplotlib.use('Agg')
from normmatch import cli
from normmatch.config import Tunables
from normmatch.rating_curve import rating_curve, plot_rating_curve
from proto_samples import SAMPLE_PROTOS
import contextlib
import io
import logging
import tempfile
import unittest
import numpy as np


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, 'normproto')
        with open(self.path, 'w') as f:
            f.write(SAMPLE_PROTOS)

    def tearDown(self):
        for name in ("NormMatch", "NormProtoLoader"):
            logger = logging.getLogger(name)
            for handler in logger.handlers:
                handler.close()
            logger.handlers = []
        self.tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = cli.main(list(argv))
        return code, out.getvalue()

    def test_rate_feature(self):
        code, out = self.run_cli(self.path, '--class', 'A', '--feature', '0.25', '0.5', '0.1', '0.2')
        self.assertEqual(code, 0)
        self.assertIn("A\t0.000000", out)

    def test_noise_without_table(self):
        code, out = self.run_cli('--feature', '0', '0', '0', '0')
        self.assertEqual(code, 0)
        self.assertIn("NO_CLASS\t0.000000", out)

    def test_errors_return_nonzero(self):
        code, _ = self.run_cli(os.path.join(self.tmp.name, 'missing'))
        self.assertEqual(code, 1)
        code, _ = self.run_cli(self.path, '--midpoint', '0')
        self.assertEqual(code, 1)
        code, _ = self.run_cli(self.path, '--class', 'AB', '--feature', '0', '0', '0', '0')
        self.assertEqual(code, 1)

    def test_plot_and_log_file(self):
        plot_path = os.path.join(self.tmp.name, 'curve.png')
        log_path = os.path.join(self.tmp.name, 'normmatch.log')
        code, _ = self.run_cli(self.path, '--plot', plot_path, '--log', log_path)
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(plot_path))
        with open(log_path) as f:
            self.assertIn("Loaded 3 prototypes", f.read())

    def test_releases_log_file_and_figure(self):
        import matplotlib.pyplot as plt
        plt.close('all')
        plot_path = os.path.join(self.tmp.name, 'curve.png')
        log_path = os.path.join(self.tmp.name, 'first.log')
        code, _ = self.run_cli(self.path, '--plot', plot_path, '--log', log_path)
        self.assertEqual(code, 0)
        self.assertEqual(plt.get_fignums(), [])
        file_handlers = [h for h in logging.getLogger("NormMatch").handlers if isinstance(h, logging.FileHandler)]
        self.assertEqual(len(file_handlers), 1)
        cli.setup_logging(log_path=os.path.join(self.tmp.name, 'second.log'))
        self.assertIsNone(file_handlers[0].stream)


class TestRatingCurve(unittest.TestCase):
    def test_curve_values(self):
        distances, ratings = rating_curve(Tunables(10.0, 2.0), n_points=41)
        self.assertEqual(distances[-1], 40.0)
        self.assertEqual(ratings[0], 0.0)
        self.assertAlmostEqual(ratings[10], 0.5)
        self.assertTrue(np.all(np.diff(ratings) > 0))

    def test_plot(self):
        import matplotlib.pyplot as plt
        fig = plot_rating_curve(Tunables(), max_distance=100.0, show=False)
        self.assertEqual(len(fig.axes), 1)
        self.assertEqual(len(fig.axes[0].lines), 5)
        plt.close(fig)


if __name__ == "__main__":
    unittest.main()
