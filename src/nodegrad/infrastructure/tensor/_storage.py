"""
Storage helpers shared by the tensor implementation and its mixins.

Tensors store their elements in a NumPy array:

- ``float64`` when every element is a plain number,
- ``object`` when at least one element is a richer element type (e.g., an
  autodiff `Node`).

Object arrays let NumPy's elementwise machinery (broadcasting, ufuncs,
reductions) dispatch to the element's own Python operators, so every tensor
operation on node elements builds graph nodes as a side effect.
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from .. import _elements as el


def to_storage(values: Iterable[Any]) -> np.ndarray:
    """
    Build a flat storage array from an iterable of elements.

    Parameters
    ----------
    values : Iterable[Any]
        Numbers or element objects.

    Returns
    -------
    np.ndarray
        1-D ``float64`` array if all values are numbers, otherwise a 1-D
        ``object`` array holding the values themselves.
    """
    items = list(values)
    if all(el.is_number(v) for v in items):
        return np.asarray(items, dtype=np.float64).reshape(len(items))
    out = np.empty(len(items), dtype=object)
    for i, v in enumerate(items):
        out[i] = el.as_element(v)
    return out


def scalar_array(x: Any) -> np.ndarray:
    """Wrap a single element into a 0-d array suitable for broadcasting."""
    if el.is_number(x):
        return np.asarray(x, dtype=np.float64)
    out = np.empty((), dtype=object)
    out[()] = x
    return out


def as_array(result: Any, dtype: Any = None) -> np.ndarray:
    """
    Ensure a NumPy result is an ndarray.

    Full reductions and 0-d ufunc calls may return a bare element instead of
    an array; those are wrapped back into a 0-d array.
    """
    if isinstance(result, np.ndarray):
        return result
    if dtype is not None and dtype != object:
        return np.asarray(result, dtype=dtype)
    return scalar_array(result)


def normalize(arr: np.ndarray) -> np.ndarray:
    """
    Narrow an object array to ``float64`` if it only holds numbers.
    """
    if arr.dtype != object:
        return arr.astype(np.float64, copy=False)
    flat = arr.reshape(-1)
    if all(el.is_number(v) for v in flat):
        return np.asarray(flat.tolist(), dtype=np.float64).reshape(arr.shape)
    return arr
