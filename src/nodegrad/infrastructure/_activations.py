"""
Module-based activation layers.

Activations are expressed with tensor operations over the closed node variant
set (sum, product, quotient, exp, ln, pow), so their derivatives come from the
per-variant backward rules and need no dedicated backward code.

Notes
-----
- All activations are stateless and own no parameters.
- `ReLU` multiplies by a constant 0/1 mask computed from the forward values;
  the mask entries become constant leaves in the graph.
- `Tanh` is computed as ``2 * sigmoid(2x) - 1``, which saturates to ``±1``
  instead of producing ``inf / inf`` for large inputs.
"""

from __future__ import annotations

import numpy as np

from ._module import Module
from .tensor._tensor import Tensor


class ReLU(Module):
    """
    Rectified linear unit.

        relu(x) = max(0, x)
    """

    def forward(self, x: Tensor) -> Tensor:
        mask = (x.to_numpy() > 0.0).astype(np.float64)
        return x * Tensor(mask)


class Sigmoid(Module):
    """
    Sigmoid activation.

        sigmoid(x) = 1 / (1 + exp(-x))
    """

    def forward(self, x: Tensor) -> Tensor:
        return 1.0 / (1.0 + (-x).exp())


class Tanh(Module):
    """
    Hyperbolic tangent activation.

        tanh(x) = 2 / (1 + exp(-2x)) - 1
    """

    def forward(self, x: Tensor) -> Tensor:
        return 2.0 / (1.0 + (x * -2.0).exp()) - 1.0


class Softmax(Module):
    """
    Softmax activation across one dimension.

    Parameters
    ----------
    dim : int, optional
        Dimension to normalize over. Defaults to -1.
    """

    def __init__(self, dim: int = -1) -> None:
        super().__init__()
        self.dim = int(dim)

    def forward(self, x: Tensor) -> Tensor:
        return x.softmax(self.dim)
