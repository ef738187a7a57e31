import unittest

from nodegrad import BackwardRules, Node, NodeOp


class TestBackwardRulesRegistry(unittest.TestCase):
    def test_every_variant_has_a_rule(self):
        BackwardRules.check_complete()
        self.assertEqual(set(BackwardRules.RULES), set(NodeOp))

    def test_duplicate_registration_is_rejected(self):
        with self.assertRaises(ValueError):

            @BackwardRules.register(NodeOp.SUM)
            def _again(node, g):
                return g, g

    def test_non_variant_keys_are_rejected(self):
        with self.assertRaises(ValueError):
            BackwardRules.register("sum")

    def test_rules_return_one_contribution_per_operand(self):
        a, b = Node(2.0), Node(5.0)
        for node in (a + b, a * b, a / b, a.pow(b), a.exp(), a.ln(), a):
            contributions = BackwardRules.apply(node, 1.0)
            self.assertEqual(len(contributions), len(node.operands))

    def test_product_rule_contributions(self):
        a, b = Node(2.0), Node(5.0)
        self.assertEqual(BackwardRules.apply(a * b, 3.0), (15.0, 6.0))


if __name__ == "__main__":
    unittest.main()
