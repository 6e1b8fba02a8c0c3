from __future__ import annotations

import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path
from random import Random
from typing import List, Tuple

from PIL import Image

from bean_counter import Mode
from bean_counter.cli import EXIT_USAGE, main, parse_arguments, plot_main, run_experiment


def run_cli(entry, argv: List[str]) -> Tuple[int, str]:
    out = io.StringIO()
    with contextlib.redirect_stdout(out):
        code = entry(argv)
    return code, out.getvalue()


class TestCommandLine(unittest.TestCase):
    def tearDown(self) -> None:
        logging.basicConfig(level=logging.WARNING, force=True)

    def test_parse_arguments(self) -> None:
        args = parse_arguments(["20", "1000", "skill", "debug"])
        assert args is not None
        self.assertEqual(
            (args.slot_count, args.bean_count, args.mode, args.extra),
            (20, 1000, Mode.SKILL, "debug"),
        )

    def test_invalid_arguments_print_usage(self) -> None:
        cases = [
            [],
            ["10", "500"],
            ["10", "500", "luck", "debug", "extra"],
            ["ten", "500", "luck"],
            ["10", "5.5", "luck"],
            ["0", "500", "luck"],
            ["10", "-1", "luck"],
            ["10", "500", "fate"],
        ]
        for argv in cases:
            with self.subTest(argv=argv):
                self.assertIsNone(parse_arguments(argv))
                code, output = run_cli(main, argv)
                self.assertEqual(code, EXIT_USAGE)
                self.assertTrue(output.startswith("Usage:"))
                self.assertNotIn("Slot bean counts:", output)

    def test_main_prints_slot_counts(self) -> None:
        for mode in ("luck", "skill"):
            with self.subTest(mode=mode):
                code, output = run_cli(main, ["10", "500", mode])
                self.assertEqual(code, 0)
                lines = output.splitlines()
                self.assertEqual(len(lines), 2)
                self.assertEqual(lines[0], "Slot bean counts:")
                counts = [int(v) for v in lines[1].split()]
                self.assertEqual(len(counts), 10)
                self.assertEqual(sum(counts), 500)

    def test_unknown_fourth_argument_is_ignored(self) -> None:
        code, output = run_cli(main, ["5", "10", "luck", "verbose"])
        self.assertEqual(code, 0)
        self.assertEqual(len(output.splitlines()), 2)

    def test_main_debug_prints_every_step(self) -> None:
        code, output = run_cli(main, ["3", "2", "luck", "debug"])
        self.assertEqual(code, 0)
        lines = output.splitlines()
        # Initial board plus four changing steps, four lines per board.
        self.assertEqual(len(lines), 5 * 4 + 2)
        self.assertEqual(lines[:3], ["       1", "     0   0", "   0   0   0"])
        self.assertEqual(lines[-2], "Slot bean counts:")
        self.assertEqual(sum(int(v) for v in lines[-1].split()), 2)

    def test_run_experiment_with_seeded_rng(self) -> None:
        first = run_experiment(10, 200, Mode.LUCK, rng=Random(42))
        second = run_experiment(10, 200, Mode.LUCK, rng=Random(42))
        self.assertEqual(first.slot_counts(), second.slot_counts())
        self.assertEqual(first.get_remaining_bean_count(), 0)
        self.assertEqual(first.get_in_flight_bean_count(), 0)

    def test_plot_main_saves_histogram(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "plots" / "histogram.png"
            code, output = run_cli(plot_main, ["8", "100", "luck", str(target)])
            self.assertEqual(code, 0)
            self.assertEqual(Path(output.strip()), target.resolve())
            with Image.open(target) as img:
                self.assertEqual(img.size, (700, 500))

    def test_plot_main_usage(self) -> None:
        code, output = run_cli(plot_main, ["8", "luck"])
        self.assertEqual(code, EXIT_USAGE)
        self.assertTrue(output.startswith("Usage: bean-counter-plot"))


if __name__ == "__main__":
    unittest.main()
