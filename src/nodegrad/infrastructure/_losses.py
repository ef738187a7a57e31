"""
Loss functions.

Losses are plain functions composed from tensor operations, so their
gradients come from the node graph like any other computation. They are
intended to be the last operation before ``backward``.

Currently implemented losses:
- `sse`: sum of squared errors (single element)
- `mse`: mean squared error (single element)
- `bce`: binary cross entropy on probabilities (element-wise tensor)
- `cce`: categorical cross entropy on probabilities with one-hot targets
  (summed over the class dimension)

Notes
-----
- Classification losses operate on probabilities, not logits. A small epsilon
  keeps ``ln`` away from zero: ``1e-7`` for `bce`, ``1e-8`` for `cce`.
- `bce` and `cce` return tensors; reduce them with ``.sum()`` or ``.mean()``
  to obtain a scalar node to back-propagate from.
"""

from __future__ import annotations

from typing import Any

from ..domain._errors import ShapeMismatchError
from .tensor._tensor import Tensor

BCE_EPSILON = 1e-7
CCE_EPSILON = 1e-8


def _check_same_shape(op: str, y: Tensor, y_pred: Tensor) -> None:
    if y.shape != y_pred.shape:
        raise ShapeMismatchError(op, y.shape, y_pred.shape)


def sse(y: Tensor, y_pred: Tensor) -> Any:
    """
    Sum of squared errors, ``sum((y_pred - y)^2)``.

    Raises
    ------
    ShapeMismatchError
        If `y` and `y_pred` differ in shape.
    """
    _check_same_shape("sse", y, y_pred)
    diff = y_pred - y
    return (diff * diff).sum()


def mse(y: Tensor, y_pred: Tensor) -> Any:
    """Mean squared error, ``sse(y, y_pred) / N``."""
    _check_same_shape("mse", y, y_pred)
    diff = y_pred - y
    return (diff * diff).mean()


def bce(y: Tensor, y_pred: Tensor) -> Tensor:
    """
    Element-wise binary cross entropy.

        -[y * ln(p + eps) + (1 - y) * ln(1 - (p - eps))]

    Parameters
    ----------
    y : Tensor
        Targets in ``[0, 1]``.
    y_pred : Tensor
        Predicted probabilities, same shape as `y`.

    Returns
    -------
    Tensor
        Per-element losses.
    """
    _check_same_shape("bce", y, y_pred)
    pos = y * (y_pred + BCE_EPSILON).ln()
    neg = (1.0 - y) * (1.0 - (y_pred - BCE_EPSILON)).ln()
    return (pos + neg) * -1.0


def cce(y: Tensor, y_pred: Tensor, dim: int = 2) -> Tensor:
    """
    Categorical cross entropy.

        -sum_c y_c * ln(p_c + eps)

    Parameters
    ----------
    y : Tensor
        One-hot targets, e.g. ``(B, T, classes)``.
    y_pred : Tensor
        Predicted probabilities, same shape as `y`.
    dim : int, optional
        Class dimension summed over. Defaults to 2.

    Returns
    -------
    Tensor
        Losses with `dim` removed.
    """
    _check_same_shape("cce", y, y_pred)
    return (y * (y_pred + CCE_EPSILON).ln()).dim_sum([dim]) * -1.0
