import unittest

import numpy as np

from nodegrad import Node, Parameter, ShapeMismatchError, Tensor


class TestParameter(unittest.TestCase):
    def test_elements_are_leaf_nodes(self):
        p = Parameter(np.arange(6.0).reshape(2, 3))
        self.assertEqual(p.shape, (2, 3))
        self.assertIsInstance(p, Tensor)
        self.assertTrue(all(isinstance(n, Node) and n.is_leaf for n in p.nodes()))
        np.testing.assert_array_equal(p.to_numpy(), np.arange(6.0).reshape(2, 3))

    def test_copy_from_numpy_keeps_leaf_identity(self):
        p = Parameter(np.zeros((2, 2)))
        before = p.nodes()
        p.copy_from_numpy(np.ones((2, 2)))
        after = p.nodes()
        self.assertTrue(all(a is b for a, b in zip(before, after)))
        np.testing.assert_array_equal(p.to_numpy(), np.ones((2, 2)))

    def test_copy_from_numpy_shape_mismatch(self):
        p = Parameter(np.zeros((2, 2)))
        with self.assertRaises(ShapeMismatchError):
            p.copy_from_numpy(np.zeros(3))

    def test_grads_and_zero_grad(self):
        p = Parameter([1.0, 2.0, 3.0])
        (p * p).sum().backward(1.0)
        np.testing.assert_allclose(p.grads(), [2.0, 4.0, 6.0])

        p.zero_grad()
        self.assertTrue(all(n.grad is None for n in p.nodes()))
        np.testing.assert_array_equal(p.grads(), [0.0, 0.0, 0.0])

    def test_operations_return_plain_tensors(self):
        p = Parameter([1.0, 2.0])
        out = p + 1.0
        self.assertIs(type(out), Tensor)

    def test_requires_grad_flag(self):
        p = Parameter([1.0], requires_grad=False)
        self.assertFalse(p.requires_grad)
        p.requires_grad = True
        self.assertTrue(p.requires_grad)


if __name__ == "__main__":
    unittest.main()
