import unittest

from nodegrad import (
    SGD,
    GradientNotSetError,
    ImmutableNodeError,
    Linear,
    Parameter,
    ShapeMismatchError,
    Tensor,
    TensorShapeError,
)
from nodegrad.domain import IModule, IOptimizer, IParameter, ITensor


class TestDomainContracts(unittest.TestCase):
    def test_implementations_conform(self):
        layer = Linear(2, 2)
        self.assertIsInstance(layer, IModule)
        self.assertIsInstance(layer.weight, IParameter)
        self.assertIsInstance(Tensor.zeros([2]), ITensor)
        self.assertIsInstance(SGD([layer], lr=1e-3), IOptimizer)

    def test_shape_errors_are_value_errors(self):
        self.assertTrue(issubclass(ShapeMismatchError, ValueError))
        self.assertTrue(issubclass(TensorShapeError, ValueError))

    def test_error_attributes(self):
        e = ShapeMismatchError("add", (2, 3), (4,))
        self.assertEqual((e.op, e.shape_a, e.shape_b), ("add", (2, 3), (4,)))

        e = TensorShapeError((2, 2), 3)
        self.assertEqual((e.shape, e.length), ((2, 2), 3))
        self.assertIn("expects 4 elements", str(e))

        self.assertEqual(ImmutableNodeError("sum").op, "sum")
        self.assertEqual(GradientNotSetError("Node(1.0)").node_repr, "Node(1.0)")

    def test_graph_errors_are_runtime_errors(self):
        self.assertTrue(issubclass(GradientNotSetError, RuntimeError))
        self.assertTrue(issubclass(ImmutableNodeError, RuntimeError))

    def test_parameter_is_a_tensor(self):
        p = Parameter([1.0, 2.0])
        self.assertIsInstance(p, Tensor)
        self.assertIsInstance(p, ITensor)


if __name__ == "__main__":
    unittest.main()
