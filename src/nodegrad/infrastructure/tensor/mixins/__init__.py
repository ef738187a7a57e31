"""
Operation mixins composed into `Tensor`.

Each mixin relies on the host class exposing ``_data`` (the storage ndarray),
``_new(arr)`` (wrap a result array) and ``_binary(other, op, ufunc)``.
"""

from ._reduction import TensorMixinReduction
from ._unary import TensorMixinUnary
from ._linalg import TensorMixinLinalg

__all__ = [
    TensorMixinReduction.__name__,
    TensorMixinUnary.__name__,
    TensorMixinLinalg.__name__,
]
