"""
Linear (fully-connected) layer implementation.

Affine projection over the last dimension of the input:

    y = x @ W + b

Shape conventions
-----------------
- x : (batch, in_features) or (batch, seq_len, in_features)
- W : (in_features, out_features)
- b : (1, out_features)  (omitted if bias=False)
- y : x.shape[:-1] + (out_features,)

The bias broadcasts over every leading dimension, so 2-D and 3-D inputs are
handled by the same code path.

Autograd integration
--------------------
`W` and `b` are `Parameter`s (tensors of leaf nodes). When `x` holds nodes or
numbers, the output holds graph nodes rooted at those leaves; there is no
separate backward rule for the layer.

Initialization
--------------
With the default ``initializer="kaiming"`` and no `bias_initializer`, weights
and bias are drawn from one normal stream with ``std = sqrt(2 / in_features)``
produced by ``numpy.random.default_rng(seed)``: the first
``in_features * out_features`` draws fill `W` row-major and the remaining
``out_features`` fill `b`. Other initializers are looked up in the
`WeightInitializer` registry and share the same seeded generator; the bias
then defaults to zeros.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from ..domain._errors import ShapeMismatchError
from ._module import Module
from ._parameter import Parameter
from .tensor._tensor import Tensor
from .utils.weight_initializer import WeightInitializer

logger = logging.getLogger(__name__)


class Linear(Module):
    """
    Fully-connected layer.

    Parameters
    ----------
    in_features : int
        Size of the last input dimension.
    out_features : int
        Size of the last output dimension.
    bias : bool, optional
        Whether to add a learnable bias. Defaults to True.
    seed : int, optional
        Seed for the initialization generator. Defaults to 0.
    initializer : str, optional
        Registered weight initializer name. Defaults to "kaiming".
    bias_initializer : str, optional
        Registered initializer for the bias. See module notes for the default.

    Raises
    ------
    ValueError
        If a feature size is not a positive integer or an initializer name is
        unknown.
    """

    def __init__(
        self,
        in_features: int,
        out_features: int,
        bias: bool = True,
        seed: int = 0,
        initializer: str = "kaiming",
        bias_initializer: Optional[str] = None,
    ) -> None:
        super().__init__()
        if int(in_features) <= 0 or int(out_features) <= 0:
            raise ValueError(
                "in_features and out_features must be positive, got "
                f"{in_features} and {out_features}"
            )
        self.in_features = int(in_features)
        self.out_features = int(out_features)
        self.seed = int(seed)

        self.weight = Parameter(np.zeros((self.in_features, self.out_features)))
        self.bias = Parameter(np.zeros((1, self.out_features))) if bias else None

        self._reset_parameters(initializer, bias_initializer)
        logger.debug(
            "Linear(%d -> %d, bias=%s, init=%s, seed=%d)",
            self.in_features,
            self.out_features,
            bias,
            initializer,
            self.seed,
        )

    def _reset_parameters(self, initializer: str, bias_initializer: Optional[str]) -> None:
        rng = np.random.default_rng(self.seed)
        if initializer == "kaiming" and bias_initializer is None:
            std = math.sqrt(2.0 / self.in_features)
            n_w = self.in_features * self.out_features
            draws = rng.normal(0.0, std, size=n_w + self.out_features)
            self.weight.copy_from_numpy(draws[:n_w].reshape(self.weight.shape))
            if self.bias is not None:
                self.bias.copy_from_numpy(draws[n_w:].reshape(self.bias.shape))
            return

        WeightInitializer(initializer)(self.weight, rng)
        if self.bias is not None:
            WeightInitializer(bias_initializer or "zeros")(self.bias, rng)

    def forward(self, x: Tensor) -> Tensor:
        """
        Compute ``x @ W + b``.

        Raises
        ------
        ShapeMismatchError
            If the last input dimension is not `in_features`.
        """
        if x.ndim < 2 or x.shape[-1] != self.in_features:
            raise ShapeMismatchError("linear", x.shape, self.weight.shape)
        y = x @ self.weight
        if self.bias is not None:
            y = y + self.bias
        return y

    def __repr__(self) -> str:
        return (
            f"Linear(in_features={self.in_features}, out_features={self.out_features}, "
            f"bias={self.bias is not None})"
        )
