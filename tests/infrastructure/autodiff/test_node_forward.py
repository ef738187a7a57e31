import math
import unittest

import numpy as np

from nodegrad import ImmutableNodeError, Node, NodeOp


class TestNodeConstruction(unittest.TestCase):
    def test_new_leaf_holds_value_and_grad(self):
        node = Node(3.1, 0.4)
        self.assertEqual(node.value, 3.1)
        self.assertEqual(node.grad, 0.4)
        self.assertIs(node.op, NodeOp.LEAF)
        self.assertTrue(node.is_leaf)
        self.assertEqual(node.operands, ())

    def test_set_grad_overwrites(self):
        node = Node(3.1)
        self.assertIsNone(node.grad)
        node.set_grad(0.4)
        self.assertEqual(node.value, 3.1)
        self.assertEqual(node.grad, 0.4)
        node.set_grad(1.5)
        self.assertEqual(node.grad, 1.5)

    def test_zero_grad_clears(self):
        node = Node(1.0, 2.0)
        node.zero_grad()
        self.assertIsNone(node.grad)

    def test_set_value_only_on_leaves(self):
        leaf = Node(1.0)
        leaf.set_value(2.5)
        self.assertEqual(leaf.value, 2.5)

        interior = leaf + Node(1.0)
        with self.assertRaises(ImmutableNodeError) as ctx:
            interior.set_value(0.0)
        self.assertEqual(ctx.exception.op, "sum")


class TestNodeForwardValues(unittest.TestCase):
    def test_add(self):
        result = Node(3.1, 0.4) + Node(22.2)
        self.assertEqual(result.value, 25.3)
        self.assertIsNone(result.grad)
        self.assertIs(result.op, NodeOp.SUM)

    def test_mul(self):
        result = Node(3.1, 0.4) * Node(22.2)
        self.assertEqual(result.value, 68.82)
        self.assertIsNone(result.grad)
        self.assertIs(result.op, NodeOp.PRODUCT)

    def test_div(self):
        result = Node(3.1, 0.4) / Node(22.2)
        self.assertEqual(result.value, 0.13963963963963966)
        self.assertIsNone(result.grad)
        self.assertIs(result.op, NodeOp.QUOTIENT)

    def test_div_by_zero_is_infinite(self):
        result = Node(3.1, 0.4) / Node(0.0)
        self.assertEqual(result.value, math.inf)

    def test_pow(self):
        result = Node(3.1, 0.4).pow(Node(22.2))
        self.assertAlmostEqual(result.value / 80952376567.60643, 1.0, places=12)
        self.assertIsNone(result.grad)
        self.assertIs(result.op, NodeOp.POWER)

    def test_exp_and_ln(self):
        e = Node(2.0).exp()
        self.assertAlmostEqual(e.value, math.exp(2.0))
        self.assertIs(e.op, NodeOp.EXPONENTIAL)

        l = Node(2.0).ln()
        self.assertAlmostEqual(l.value, math.log(2.0))
        self.assertIs(l.op, NodeOp.NATURAL_LOG)

    def test_ln_of_non_positive_values(self):
        self.assertEqual(Node(0.0).ln().value, -math.inf)
        self.assertTrue(math.isnan(Node(-1.0).ln().value))

    def test_operands_are_shared_references(self):
        a = Node(1.0)
        b = Node(2.0)
        c = a * b
        self.assertIs(c.operands[0], a)
        self.assertIs(c.operands[1], b)

    def test_numbers_are_lifted_on_either_side(self):
        a = Node(2.0)
        for expr, expected in [
            (a + 1, 3.0),
            (1 + a, 3.0),
            (a * 3, 6.0),
            (3 * a, 6.0),
            (a / 4, 0.5),
            (4 / a, 2.0),
            (a**3, 8.0),
            (2**a, 4.0),
            (a - 5, -3.0),
            (5 - a, 3.0),
            (-a, -2.0),
        ]:
            self.assertIsInstance(expr, Node)
            self.assertAlmostEqual(float(expr), expected)

    def test_numpy_scalar_on_the_left_defers_to_node(self):
        out = np.float64(2.0) * Node(3.0)
        self.assertIsInstance(out, Node)
        self.assertEqual(out.value, 6.0)

    def test_subtraction_stays_in_closed_variant_set(self):
        out = Node(5.0) - Node(2.0)
        self.assertIs(out.op, NodeOp.SUM)
        self.assertIs(out.operands[1].op, NodeOp.PRODUCT)

    def test_clone_shares_operands(self):
        a, b = Node(1.0), Node(2.0)
        c = a + b
        c.set_grad(3.0)
        d = c.clone()
        self.assertIsNot(d, c)
        self.assertIs(d.op, NodeOp.SUM)
        self.assertEqual(d.value, c.value)
        self.assertEqual(d.grad, 3.0)
        self.assertIs(d.operands[0], a)

    def test_repr_is_not_recursive(self):
        x = Node(1.0)
        for _ in range(50):
            x = x + 1.0
        text = repr(x)
        self.assertIn("sum", text)
        self.assertLess(len(text), 200)

    def test_nested_nodes_as_values(self):
        inner = Node(Node(2.0))
        outer = inner * Node(Node(3.0))
        self.assertIsInstance(outer.value, Node)
        self.assertEqual(float(outer), 6.0)


if __name__ == "__main__":
    unittest.main()
