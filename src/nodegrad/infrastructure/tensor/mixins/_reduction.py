"""
Reduction operations for `Tensor`.

Reductions on node tensors add elements pairwise in index order, so the
resulting graph is a left-leaning chain of SUM nodes per output position.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ... import _elements as el


class TensorMixinReduction:
    """
    Mixin providing `dim_sum`, `sum`, `mean` and `softmax`.

    The host class must expose ``_data`` (an ndarray) and ``_new(arr)``.
    """

    def dim_sum(self, dims: Union[int, Sequence[int]], keepdims: bool = False):
        """
        Sum across one or more dimensions.

        Parameters
        ----------
        dims : int or Sequence[int]
            Dimensions to reduce. Negative values count from the end.
        keepdims : bool, optional
            Keep reduced dimensions with size 1. Defaults to False.

        Returns
        -------
        Tensor
            Tensor with the reduced dimensions removed (or set to 1).

        Raises
        ------
        ValueError
            If a dimension is out of range.
        """
        if isinstance(dims, int):
            dims = (dims,)
        ndim = self._data.ndim
        axes = []
        for d in dims:
            if not -ndim <= d < ndim:
                raise ValueError(
                    f"dim {d} is out of range for a {ndim}-d tensor"
                )
            axes.append(d % ndim)
        with el.ieee():
            out = np.add.reduce(self._data, axis=tuple(sorted(set(axes))), keepdims=keepdims)
        return self._new(out)

    def sum(self) -> Any:
        """
        Sum of every element, returned as a single element.

        An empty tensor sums to ``0.0``.
        """
        flat = self._data.reshape(-1)
        if flat.size == 0:
            return np.float64(0.0)
        with el.ieee():
            return np.add.reduce(flat)

    def mean(self) -> Any:
        """Arithmetic mean of every element, as a single element."""
        return el.div(self.sum(), float(max(self._data.size, 1)))

    def softmax(self, dim: int = -1, mask: Optional[Any] = None):
        """
        Softmax across one dimension.

        ``softmax(x)_i = e^{x_i} / sum_j e^{x_j}``, computed without
        subtracting the maximum, so very large inputs overflow to ``inf``.

        Parameters
        ----------
        dim : int, optional
            Dimension to normalize over. Defaults to the last one.
        mask : Tensor, optional
            Multiplicative 0/1 mask broadcast against the input. Masked-out
            positions contribute nothing to the normalizer and produce 0.

        Returns
        -------
        Tensor
            Tensor with the same shape as the input.
        """
        e = self.exp()
        if mask is not None:
            e = e * mask
        return e / e.dim_sum([dim], keepdims=True)
