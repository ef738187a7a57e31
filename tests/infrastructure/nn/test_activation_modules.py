import unittest

import numpy as np

from nodegrad import ReLU, Sigmoid, Softmax, Tanh, Tensor


class TestActivations(unittest.TestCase):
    def setUp(self):
        self.x0 = np.array([[-2.0, -0.5, 0.0, 0.5, 3.0]])

    def test_relu_forward_and_grad(self):
        x = Tensor.leaves(self.x0)
        out = ReLU()(x)
        np.testing.assert_allclose(out.to_numpy(), np.maximum(self.x0, 0.0))
        out.sum().backward(1.0)
        np.testing.assert_allclose(x.grad_numpy(), (self.x0 > 0).astype(float))

    def test_sigmoid_forward_and_grad(self):
        x = Tensor.leaves(self.x0)
        out = Sigmoid()(x)
        s = 1.0 / (1.0 + np.exp(-self.x0))
        np.testing.assert_allclose(out.to_numpy(), s)
        out.sum().backward(1.0)
        np.testing.assert_allclose(x.grad_numpy(), s * (1.0 - s))

    def test_tanh_forward_and_grad(self):
        x = Tensor.leaves(self.x0)
        out = Tanh()(x)
        np.testing.assert_allclose(out.to_numpy(), np.tanh(self.x0), atol=1e-12)
        out.sum().backward(1.0)
        np.testing.assert_allclose(x.grad_numpy(), 1.0 - np.tanh(self.x0) ** 2, atol=1e-12)

    def test_tanh_saturates_without_nan(self):
        out = Tanh()(Tensor.from_vec([2], [1000.0, -1000.0])).to_numpy()
        np.testing.assert_allclose(out, [1.0, -1.0])

    def test_softmax_module(self):
        x = Tensor.from_vec([2, 2], [1.0, 1.0, 0.0, np.log(3.0)])
        out = Softmax(dim=-1)(x).to_numpy()
        np.testing.assert_allclose(out, [[0.5, 0.5], [0.25, 0.75]])

    def test_activations_have_no_parameters(self):
        for act in (ReLU(), Sigmoid(), Tanh(), Softmax()):
            self.assertEqual(list(act.parameters()), [])


if __name__ == "__main__":
    unittest.main()
