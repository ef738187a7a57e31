"""
Shape manipulation and matrix multiplication for `Tensor`.

Matrix products on element tensors are built from broadcast element-wise
products accumulated over the contracted dimension, so each output element
is ``a[.., i, 0] * b[.., 0, j] + a[.., i, 1] * b[.., 1, j] + ...`` with the
additions applied left to right.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ....domain._errors import ShapeMismatchError, TensorShapeError, _product
from ... import _elements as el


class TensorMixinLinalg:
    """
    Mixin providing `matmul`, `transpose` and `reshape`.
    """

    def matmul(self, other):
        """
        Matrix multiplication over the last two dimensions.

        Supports ``(n, k) @ (k, m)`` as well as batched inputs where leading
        dimensions broadcast, e.g. ``(B, T, k) @ (k, m)`` or
        ``(B, H, T, k) @ (B, H, k, m)``.

        Raises
        ------
        ShapeMismatchError
            If either operand has fewer than two dimensions, the inner
            dimensions differ, or the batch dimensions do not broadcast.
        """
        a, b = self._data, other._data
        if a.ndim < 2 or b.ndim < 2 or a.shape[-1] != b.shape[-2]:
            raise ShapeMismatchError("matmul", a.shape, b.shape)
        try:
            np.broadcast_shapes(a.shape[:-2], b.shape[:-2])
        except ValueError as e:
            raise ShapeMismatchError("matmul", a.shape, b.shape) from e

        if a.dtype != object and b.dtype != object:
            with el.ieee():
                return self._new(np.matmul(a, b))

        k = a.shape[-1]
        if k == 0:
            batch = np.broadcast_shapes(a.shape[:-2], b.shape[:-2])
            return self._new(np.zeros(batch + (a.shape[-2], b.shape[-1])))
        with el.ieee():
            acc = np.multiply(a[..., :, 0:1], b[..., 0:1, :])
            for i in range(1, k):
                acc = np.add(acc, np.multiply(a[..., :, i : i + 1], b[..., i : i + 1, :]))
        return self._new(acc)

    def __matmul__(self, other):
        return self.matmul(other)

    def transpose(self):
        """
        Swap the last two dimensions. 0-d and 1-d tensors are returned as-is.
        """
        if self._data.ndim < 2:
            return self._new(self._data)
        return self._new(np.swapaxes(self._data, -1, -2))

    def reshape(self, new_shape: Sequence[int]):
        """
        Return a tensor with the same elements laid out in `new_shape`.

        One dimension may be ``-1`` and is inferred.

        Raises
        ------
        TensorShapeError
            If the element count does not match `new_shape`.
        """
        new_shape = tuple(int(d) for d in new_shape)
        size = int(self._data.size)
        if -1 in new_shape:
            known = _product(tuple(d for d in new_shape if d != -1))
            if new_shape.count(-1) > 1 or known == 0 or size % known != 0:
                raise TensorShapeError(new_shape, size)
            new_shape = tuple(size // known if d == -1 else d for d in new_shape)
        if _product(new_shape) != size:
            raise TensorShapeError(new_shape, size)
        return self._new(self._data.reshape(new_shape))
