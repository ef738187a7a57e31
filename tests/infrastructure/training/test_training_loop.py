import unittest

import numpy as np

from nodegrad import SGD, GradientMode, Linear, Sigmoid, Tensor, bce, mse


class TestTrainingLoop(unittest.TestCase):
    def test_linear_regression_loss_decreases(self):
        rng = np.random.default_rng(0)
        x0 = rng.normal(size=(8, 3))
        y0 = x0 @ np.array([[1.0], [-2.0], [0.5]]) + 0.3

        model = Linear(3, 1, seed=0)
        opt = SGD(model.parameters(), lr=0.05, max_itr=60)
        x, y = Tensor(x0), Tensor(y0)

        losses = []
        for itr in range(60):
            loss = mse(y, model(x))
            loss.backward(1.0)
            opt.step(itr)
            losses.append(loss.value)

        self.assertLess(losses[-1], 0.5 * losses[0])

    def test_logistic_regression_with_bce(self):
        x0 = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
        y0 = np.array([[0.0], [1.0], [1.0], [1.0]])

        model = Linear(2, 1, seed=1)
        act = Sigmoid()
        opt = SGD([model], lr=0.5)
        x, y = Tensor(x0), Tensor(y0)

        first = last = None
        for _ in range(40):
            loss = bce(y, act(model(x))).mean()
            loss.backward(1.0, GradientMode.ACCUMULATE)
            opt.step()
            first = loss.value if first is None else first
            last = loss.value

        self.assertLess(last, first)


if __name__ == "__main__":
    unittest.main()
