"""
Numeric helpers implementing the element contract for plain numbers.

Builtin numbers satisfy `IElement` directly but carry no ``exp``/``ln``/
``pow`` methods, and Python's ``float`` raises `ZeroDivisionError` where the
IEEE representation would produce ``inf``. The helpers in this module give
every element type the same behaviour:

- Elements that implement the method themselves (e.g., autodiff `Node`) are
  dispatched to it.
- Plain numbers are promoted to ``numpy.float64`` and evaluated with NumPy
  under a suppressed floating-point error state, so division by zero and
  logarithms of non-positive values yield ``inf``/``-inf``/``nan``.

These helpers are used both when nodes compute their forward values and when
backward rules compute local gradients.
"""

from __future__ import annotations

from typing import Any

import numpy as np

_IEEE_ERRSTATE = dict(divide="ignore", over="ignore", invalid="ignore", under="ignore")


def is_number(x: Any) -> bool:
    """Return True for Python and NumPy real scalars (bool excluded)."""
    return isinstance(x, (int, float, np.integer, np.floating)) and not isinstance(
        x, bool
    )


def as_element(x: Any) -> Any:
    """
    Promote plain numbers to ``numpy.float64``; return other elements unchanged.

    Parameters
    ----------
    x : Any
        A number or an element implementing the element contract.

    Returns
    -------
    Any
        ``numpy.float64`` for numeric input, otherwise `x` itself.
    """
    if is_number(x):
        return np.float64(x)
    return x


def ieee():
    """Context manager suppressing NumPy floating-point warnings."""
    return np.errstate(**_IEEE_ERRSTATE)


def add(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        with ieee():
            return np.float64(a) + np.float64(b)
    return a + b


def mul(a: Any, b: Any) -> Any:
    if is_number(a) and is_number(b):
        with ieee():
            return np.float64(a) * np.float64(b)
    return a * b


def div(a: Any, b: Any) -> Any:
    """
    Divide two elements with IEEE semantics for numbers.

    ``div(3.1, 0.0)`` returns ``inf`` rather than raising.
    """
    if is_number(a) and is_number(b):
        with ieee():
            return np.float64(a) / np.float64(b)
    return a / b


def negate(x: Any) -> Any:
    if is_number(x):
        return -np.float64(x)
    return -x


def exp(x: Any) -> Any:
    """
    Exponential of an element.

    Parameters
    ----------
    x : Any
        A number, or an element exposing ``exp()``.

    Returns
    -------
    Any
        ``e ** x``.
    """
    if is_number(x):
        with ieee():
            return np.exp(np.float64(x))
    return x.exp()


def ln(x: Any) -> Any:
    """
    Natural logarithm of an element.

    For numbers, ``ln(0.0)`` is ``-inf`` and ``ln(-1.0)`` is ``nan``.
    """
    if is_number(x):
        with ieee():
            return np.log(np.float64(x))
    return x.ln()


def power(base: Any, exponent: Any) -> Any:
    """
    Raise `base` to `exponent`.

    Parameters
    ----------
    base : Any
        A number or an element exposing ``pow()``.
    exponent : Any
        A number or an element.

    Returns
    -------
    Any
        ``base ** exponent``.

    Notes
    -----
    When `base` is a plain number but `exponent` is not, the exponent's
    reflected ``__rpow__`` decides the result type.
    """
    if is_number(base) and is_number(exponent):
        with ieee():
            return np.power(np.float64(base), np.float64(exponent))
    if is_number(base):
        return exponent.__rpow__(base)
    return base.pow(exponent)


def scalar_value(x: Any) -> float:
    """
    Unwrap nested element values down to a Python float.

    Elements exposing a ``value`` attribute (autodiff nodes) are unwrapped
    repeatedly; numbers are converted directly.
    """
    while hasattr(x, "value"):
        x = x.value
    return float(x)
