import unittest

from chemlab.catalog import CatalogError, ReactionCatalog, default_catalog
from chemlab.models import BalancedReaction, Compound, Element


class TestBalancedReaction(unittest.TestCase):
    def test_total_reactants(self):
        reaction = BalancedReaction({"H": 2, "O": 1}, {"H₂O": 1}, "2H + O → H₂O")
        self.assertEqual(reaction.total_reactants, 3)

    def test_empty_reactants_rejected(self):
        with self.assertRaises(ValueError):
            BalancedReaction({}, {"X": 1}, "→ X")

    def test_zero_count_rejected(self):
        with self.assertRaises(ValueError):
            BalancedReaction({"H": 0}, {"H₂": 1}, "0H → H₂")
        with self.assertRaises(ValueError):
            BalancedReaction({"H": 2}, {"H₂": -1}, "2H → -H₂")

    def test_maps_are_read_only(self):
        reactants = {"H": 2}
        reaction = BalancedReaction(reactants, {"H₂": 1}, "2H → H₂")
        reactants["H"] = 5
        self.assertEqual(reaction.reactants["H"], 2)
        with self.assertRaises(TypeError):
            reaction.reactants["H"] = 3


class TestReactionCatalog(unittest.TestCase):
    def setUp(self):
        self.catalog = default_catalog()

    def test_compound_lookup(self):
        water = self.catalog.compound_by_formula("H₂O")
        self.assertIsNotNone(water)
        self.assertEqual(water.common_name, "Water")
        self.assertIsNone(self.catalog.compound_by_formula("CO₂"))

    def test_element_lookup(self):
        self.assertEqual(self.catalog.element_by_symbol("Na").name, "Sodium")
        self.assertIsNone(self.catalog.element_by_symbol("He"))

    def test_registration_order(self):
        equations = [r.equation for r in self.catalog.all_reactions()]
        self.assertEqual(len(equations), 12)
        self.assertEqual(equations[0], "2H → H₂")
        self.assertEqual(equations[2], "2H + O → H₂O")
        self.assertEqual(equations[-1], "2Na + 2H₂O → 2NaOH + H₂")

    def test_reactions_with_reactant(self):
        equations = [r.equation for r in self.catalog.reactions_with_reactant("Na")]
        self.assertEqual(equations, ["Na + Cl → NaCl", "2Na + 2H₂O → 2NaOH + H₂"])

    def test_unknown_reactant_rejected(self):
        with self.assertRaises(CatalogError):
            ReactionCatalog(
                [Element("H", "Hydrogen")],
                [],
                [BalancedReaction({"H": 1, "He": 1}, {"HHe": 1}, "H + He → HHe")],
            )

    def test_duplicates_rejected(self):
        with self.assertRaises(CatalogError):
            ReactionCatalog([Element("H", "Hydrogen"), Element("H", "Hydrogen")], [], [])
        with self.assertRaises(CatalogError):
            ReactionCatalog(
                [],
                [Compound("H₂", "Dihydrogen", "Hydrogen Gas")] * 2,
                [],
            )

    def test_unknown_product_allowed(self):
        catalog = ReactionCatalog(
            [Element("H", "Hydrogen")],
            [],
            [BalancedReaction({"H": 3}, {"H₃": 1}, "3H → H₃")],
        )
        self.assertEqual(len(catalog), 1)
        self.assertIsNone(catalog.compound_by_formula("H₃"))


if __name__ == '__main__':
    unittest.main()
