import json
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from chemlab.cli import app


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_reactions(self):
        result = self.runner.invoke(app, ["reactions"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("2H + O → H₂O", result.output)

    def test_hints(self):
        result = self.runner.invoke(app, ["hints", "Na"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("NaCl (Salt)", result.output)
        result = self.runner.invoke(app, ["hints", "He"])
        self.assertIn("No reactions use He.", result.output)

    def test_lessons(self):
        result = self.runner.invoke(app, ["lessons"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("water: Water Reaction Lesson", result.output)

    def test_water_demo(self):
        result = self.runner.invoke(app, ["water-demo"])
        self.assertEqual(result.exit_code, 0)
        state = json.loads(result.output)
        self.assertEqual(state["history"], ["H₂O", "H₂O"])
        self.assertEqual(state["elements"], [])

    def test_play(self):
        payload = {
            "placements": [
                {"symbol": "Na", "x": 0, "y": 0},
                {"symbol": "Cl", "x": 20, "y": 0},
                {"symbol": "H", "x": 500, "y": 0},
            ]
        }
        with tempfile.TemporaryDirectory() as tmp:
            config = Path(tmp) / "config.json"
            output = Path(tmp) / "out.json"
            config.write_text(json.dumps(payload), encoding="utf-8")
            result = self.runner.invoke(app, ["play", str(config), "--output", str(output)])
            self.assertEqual(result.exit_code, 0, result.output)
            state = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual([c["symbol"] for c in state["compounds"]], ["NaCl"])
        self.assertEqual([e["symbol"] for e in state["elements"]], ["H"])
        self.assertEqual(state["discovered"], ["NaCl"])

    def test_play_rejects_unknown_symbol(self):
        payload = {"placements": [{"symbol": "Xx", "x": 0, "y": 0}]}
        with tempfile.TemporaryDirectory() as tmp:
            config = Path(tmp) / "config.json"
            config.write_text(json.dumps(payload), encoding="utf-8")
            result = self.runner.invoke(app, ["play", str(config)])
        self.assertNotEqual(result.exit_code, 0)


if __name__ == '__main__':
    unittest.main()
