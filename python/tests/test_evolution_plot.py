import contextlib
import io
import os
import sys
import tempfile
import unittest
from unittest import mock

# Make the plotting scripts importable when tests are run from the repo root.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "plotting"))

import reduction_evolution_plot as evo  # noqa: E402
from plot_common import compute_field  # noqa: E402

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402

from givenslas.dump import write_steps_csv  # noqa: E402
from givenslas.reduction import reduce_matrix  # noqa: E402
from givenslas.report import WORKED_EXAMPLE  # noqa: E402


class TestEvolutionPlot(unittest.TestCase):
    def test_nonzero_mask(self):
        W = np.array([[1.0, -1e-14], [0.0, -2.0]])
        mask = compute_field(W, "nz", eps=1e-12)
        np.testing.assert_array_equal(mask, [[1.0, 0.0], [0.0, 1.0]])
        with self.assertRaises(ValueError):
            compute_field(W, "phase", eps=0.0)

    def test_generate_writes_mosaic(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_path = os.path.join(tmp, "plots", "mosaic.png")
            with contextlib.redirect_stdout(io.StringIO()):
                code = evo.main(["--generate", "--out", out_path, "--mode", "nz", "--eps", "1e-12"])
            self.assertEqual(code, 0)
            self.assertTrue(os.path.isfile(out_path))
            self.assertGreater(os.path.getsize(out_path), 0)

    def test_plot_from_dump(self):
        red = reduce_matrix(WORKED_EXAMPLE)
        with tempfile.TemporaryDirectory() as tmp:
            csv_path = write_steps_csv(red, os.path.join(tmp, "steps.csv"))
            out_path = os.path.join(tmp, "abs.png")
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                code = evo.main(["--dump-csv", csv_path, "--out", out_path, "--cols", "2"])
            self.assertEqual(code, 0)
            self.assertTrue(os.path.isfile(out_path))
        self.assertIn("4 frame(s)", out.getvalue())

    def test_requires_exactly_one_source(self):
        with self.assertRaises(SystemExit):
            evo.main(["--out", "unused.png"])

    def test_bad_input_exits_with_message(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_path = os.path.join(tmp, "unused.png")
            bad_csv = os.path.join(tmp, "bad.csv")
            pd.DataFrame({"step": [0], "row": [0], "col": [0]}).to_csv(bad_csv, index=False)
            cases = [
                (["--generate", "--matrix", "1,2,3;4,5,6"], "square"),
                (["--generate", "--max-sweeps", "0"], "max_sweeps"),
                (["--dump-csv", bad_csv], "missing columns"),
                (["--dump-csv", os.path.join(tmp, "absent.csv")], "CSV not found"),
            ]
            for args, message in cases:
                with self.subTest(args=args):
                    with self.assertRaises(SystemExit) as ctx:
                        evo.main(args + ["--out", out_path])
                    self.assertIn(message, str(ctx.exception.code))
            self.assertFalse(os.path.exists(out_path))

    def test_title_from_environment(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_path = os.path.join(tmp, "titled.png")
            with mock.patch.dict(os.environ, {"GIVENSLAS_PLOT_TITLE": "worked example"}), \
                    mock.patch.object(evo, "heatmap_mosaic", wraps=evo.heatmap_mosaic) as mosaic, \
                    contextlib.redirect_stdout(io.StringIO()):
                evo.main(["--generate", "--out", out_path])
            self.assertTrue(os.path.isfile(out_path))
        self.assertEqual(mosaic.call_args.kwargs["title"], "worked example")

    def test_step_titles(self):
        self.assertEqual(evo.step_title(0), "A (original)")
        self.assertEqual(evo.step_title(2, 1), "after U2  sweep=1")


if __name__ == "__main__":
    unittest.main()
