import unittest

import numpy as np

from nodegrad import Node, Tensor, TensorShapeError


class TestTensorFactories(unittest.TestCase):
    def test_from_vec_numeric(self):
        t = Tensor.from_vec([2, 3], [1, 2, 3, 4, 5, 6])
        self.assertEqual(t.shape, (2, 3))
        self.assertEqual(t.ndim, 2)
        self.assertEqual(t.size, 6)
        self.assertEqual(t.dtype, np.float64)
        np.testing.assert_array_equal(t.to_numpy(), np.arange(1, 7).reshape(2, 3))

    def test_from_vec_length_mismatch_raises(self):
        with self.assertRaises(TensorShapeError) as ctx:
            Tensor.from_vec([2, 2], [1.0, 2.0, 3.0])
        self.assertEqual(ctx.exception.shape, (2, 2))
        self.assertEqual(ctx.exception.length, 3)
        self.assertIn("does not match", str(ctx.exception))

    def test_from_vec_with_nodes_keeps_identity(self):
        nodes = [Node(float(i)) for i in range(4)]
        t = Tensor.from_vec([2, 2], nodes)
        self.assertEqual(t.dtype, object)
        self.assertIs(t[1, 0], nodes[2])
        self.assertEqual(list(t.elements()), nodes)

    def test_fill_with_clone_creates_distinct_elements(self):
        proto = Node(1.5)
        t = Tensor.fill_with_clone([2, 2], proto)
        elems = list(t.elements())
        self.assertEqual(len({id(e) for e in elems}), 4)
        self.assertTrue(all(e is not proto for e in elems))
        np.testing.assert_array_equal(t.to_numpy(), np.full((2, 2), 1.5))

    def test_fill_with_clone_numbers(self):
        t = Tensor.fill_with_clone([3], 2.0)
        np.testing.assert_array_equal(t.to_numpy(), [2.0, 2.0, 2.0])

    def test_zeros_ones(self):
        np.testing.assert_array_equal(Tensor.zeros([2, 3]).to_numpy(), np.zeros((2, 3)))
        np.testing.assert_array_equal(Tensor.ones([4]).to_numpy(), np.ones(4))

    def test_leaves(self):
        t = Tensor.leaves([[1.0, 2.0], [3.0, 4.0]])
        self.assertEqual(t.shape, (2, 2))
        self.assertTrue(all(isinstance(e, Node) and e.is_leaf for e in t.elements()))
        np.testing.assert_array_equal(t.to_numpy(), [[1.0, 2.0], [3.0, 4.0]])

    def test_constructor_from_nested_lists(self):
        t = Tensor([[1, 2], [3, 4]])
        self.assertEqual(t.dtype, np.float64)
        self.assertEqual(t.shape, (2, 2))


class TestTensorIndexing(unittest.TestCase):
    def test_getitem_returns_element_or_subtensor(self):
        t = Tensor.from_vec([2, 3], [0, 1, 2, 3, 4, 5])
        self.assertEqual(t[1, 2], 5.0)
        row = t[1]
        self.assertIsInstance(row, Tensor)
        np.testing.assert_array_equal(row.to_numpy(), [3.0, 4.0, 5.0])

    def test_setitem_number_and_node(self):
        t = Tensor.zeros([2, 2])
        t[0, 1] = 7.0
        self.assertEqual(t[0, 1], 7.0)

        n = Node(3.0)
        t[1, 1] = n
        self.assertEqual(t.dtype, object)
        self.assertIs(t[1, 1], n)
        np.testing.assert_array_equal(t.to_numpy(), [[0.0, 7.0], [0.0, 3.0]])

    def test_item(self):
        self.assertEqual(Tensor.from_vec([1, 1], [4.0]).item(), 4.0)
        with self.assertRaises(ValueError):
            Tensor.zeros([2]).item()

    def test_reshape(self):
        t = Tensor.from_vec([2, 3], list(range(6)))
        r = t.reshape([3, 2])
        self.assertEqual(r.shape, (3, 2))
        self.assertEqual(t.reshape([-1]).shape, (6,))
        with self.assertRaises(TensorShapeError):
            t.reshape([4, 2])

    def test_reshape_keeps_element_identity(self):
        t = Tensor.leaves(np.arange(6.0).reshape(2, 3))
        r = t.reshape([6])
        self.assertIs(r[4], t[1, 1])

    def test_concat(self):
        a = Tensor.from_vec([2, 1], [1, 2])
        b = Tensor.from_vec([2, 2], [3, 4, 5, 6])
        c = Tensor.concat([a, b], dim=-1)
        np.testing.assert_array_equal(c.to_numpy(), [[1, 3, 4], [2, 5, 6]])

    def test_grad_numpy_reads_zero_for_missing_grads(self):
        t = Tensor.leaves([1.0, 2.0])
        t[0].set_grad(5.0)
        np.testing.assert_array_equal(t.grad_numpy(), [5.0, 0.0])


if __name__ == "__main__":
    unittest.main()
