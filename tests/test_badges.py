import unittest

from chemlab.badges import DEFAULT_BADGE_RULES, BadgeRule, evaluate_badges
from chemlab.catalog import default_catalog


class TestBadges(unittest.TestCase):
    def setUp(self):
        catalog = default_catalog()
        self.water = catalog.compound_by_formula("H₂O")
        self.salt = catalog.compound_by_formula("NaCl")
        self.oxygen = catalog.compound_by_formula("O₂")
        self.hydrogen = catalog.compound_by_formula("H₂")

    def test_thresholds(self):
        cases = [
            ("Salt Master", self.salt, 3),
            ("Water Wizard", self.water, 3),
            ("Oxidation Expert", self.oxygen, 2),
            ("Hydrogen Hero", self.hydrogen, 2),
        ]
        for badge, compound, needed in cases:
            with self.subTest(badge=badge):
                discovered = {compound.formula}
                short = [compound] * (needed - 1)
                self.assertNotIn(badge, evaluate_badges(compound, short, discovered, []))
                enough = [compound] * needed
                self.assertIn(badge, evaluate_badges(compound, enough, discovered, []))

    def test_compound_collector(self):
        discovered = {"H₂", "O₂", "H₂O", "NaCl"}
        self.assertEqual(evaluate_badges(self.salt, [self.salt], discovered, []), [])
        discovered.add("OH")
        self.assertEqual(
            evaluate_badges(self.salt, [self.salt], discovered, []), ["Compound Collector"]
        )

    def test_already_unlocked_not_repeated(self):
        history = [self.water] * 4
        self.assertEqual(
            evaluate_badges(self.water, history, {"H₂O"}, ["Water Wizard"]), []
        )

    def test_custom_rules(self):
        rule = BadgeRule("First Steps", "Make anything.", lambda c, h, d: len(h) >= 1)
        self.assertEqual(
            evaluate_badges(self.water, [self.water], {"H₂O"}, [], rules=[rule]),
            ["First Steps"],
        )

    def test_rule_order(self):
        self.assertEqual(
            [rule.name for rule in DEFAULT_BADGE_RULES],
            ["Salt Master", "Water Wizard", "Oxidation Expert", "Hydrogen Hero", "Compound Collector"],
        )


if __name__ == '__main__':
    unittest.main()
