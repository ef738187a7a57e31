"""
Concrete trainable parameter implementation.

This module defines `Parameter`, an infrastructure-level implementation of the
domain contract `IParameter`. A `Parameter` is a `Tensor` whose elements are
leaf `Node`s. Feeding it through tensor operations builds a computation graph
rooted at those leaves; after a backward pass the gradients are read directly
off the leaves, and optimizers write updated values back into them.

Design notes
------------
- `Parameter` subclasses `Tensor` to reuse indexing, shape handling and all
  tensor operations.
- Leaf identity is stable for the lifetime of the parameter. Updates
  (`copy_from_numpy`, optimizer steps) change leaf values in place, so graphs
  built later still reference the same leaves.
- The `requires_grad` flag lets optimizers skip frozen parameters without
  changing module structure.
"""

from __future__ import annotations

from typing import Any, List

import numpy as np

from ..domain._errors import ShapeMismatchError
from ..domain._parameter import IParameter
from .autodiff._node import Node
from .tensor._tensor import Tensor


class Parameter(Tensor, IParameter):
    """
    Trainable tensor of leaf nodes.

    Parameters
    ----------
    values : array_like
        Initial numeric values. Their shape becomes the parameter's shape.
    requires_grad : bool, optional
        Whether optimizers should update this parameter. Defaults to True.

    Notes
    -----
    Results of operations on a `Parameter` are plain `Tensor`s.
    """

    _requires_grad: bool = True

    def __init__(self, values: Any, requires_grad: bool = True) -> None:
        arr = np.asarray(values, dtype=np.float64)
        storage = np.empty(arr.shape, dtype=object)
        flat = storage.reshape(-1)
        for i, v in enumerate(arr.reshape(-1)):
            flat[i] = Node(v)
        self._data = storage
        self._requires_grad = bool(requires_grad)

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether optimizers should update this parameter.
        """
        return self._requires_grad

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        self._requires_grad = bool(value)

    def nodes(self) -> List[Node]:
        """Leaf nodes backing this parameter, in row-major order."""
        return list(self._data.reshape(-1))

    def zero_grad(self) -> None:
        """
        Clear the gradient of every leaf.

        Notes
        -----
        Each backward pass overwrites the gradients of the nodes it reaches,
        so calling this between steps mainly guarantees that leaves the next
        pass does not reach are skipped by the optimizer.
        """
        for leaf in self.nodes():
            leaf.zero_grad()

    def grads(self) -> np.ndarray:
        """Current leaf gradients as a float array (``0.0`` where unset)."""
        return self.grad_numpy()

    def copy_from_numpy(self, values: Any) -> "Parameter":
        """
        Overwrite leaf values in place from a NumPy array of the same shape.

        Raises
        ------
        ShapeMismatchError
            If `values` does not have this parameter's shape.
        """
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != self.shape:
            raise ShapeMismatchError("copy_from_numpy", self.shape, arr.shape)
        for leaf, v in zip(self.nodes(), arr.reshape(-1)):
            leaf.set_value(v)
        return self

    def __repr__(self) -> str:
        return f"Parameter(shape={self.shape}, requires_grad={self._requires_grad})"
