"""
Element-wise real-valued functions for `Tensor`.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from ... import _elements as el
from .._storage import normalize

_exp = np.frompyfunc(el.exp, 1, 1)
_ln = np.frompyfunc(el.ln, 1, 1)


class TensorMixinUnary:
    """
    Mixin providing `exp`, `ln`, `pow` and `map`.

    Numeric tensors are evaluated with vectorized NumPy functions; element
    tensors call each element's own method.
    """

    def exp(self):
        if self._data.dtype != object:
            with el.ieee():
                return self._new(np.exp(self._data))
        return self._new(_exp(self._data))

    def ln(self):
        """Natural logarithm; non-positive inputs give ``-inf``/``nan``."""
        if self._data.dtype != object:
            with el.ieee():
                return self._new(np.log(self._data))
        return self._new(_ln(self._data))

    def pow(self, exponent: Any):
        """
        Raise every element to `exponent`.

        Parameters
        ----------
        exponent : number, element or Tensor
            Broadcast against the receiver like any binary op.
        """
        return self._binary(exponent, "pow", np.power)

    def __pow__(self, exponent: Any):
        return self.pow(exponent)

    def map(self, fn: Callable[[Any], Any]):
        """
        Apply `fn` to every element and collect the results in a new tensor
        of the same shape.
        """
        return self._new(normalize(np.frompyfunc(fn, 1, 1)(self._data)))
