"""
Concrete N-dimensional tensor, generic over its element type.

`Tensor` satisfies the domain-level `ITensor` protocol. Elements can be plain
numbers or any object implementing the element contract (`IElement` /
`IRealElement`), most importantly autodiff `Node`s. When the elements are
nodes, every tensor operation builds graph nodes as it evaluates, so a tensor
of leaves fed through a network yields a tensor (or single node) that can be
back-propagated directly.

Storage
-------
Elements are held in a NumPy array (``float64`` for numbers, ``object``
otherwise; see `_storage`). NumPy provides broadcasting, indexing and
iteration; the arithmetic itself is delegated to the elements.

Design notes
------------
- Element-wise binary ops follow NumPy broadcasting. Incompatible shapes
  raise `ShapeMismatchError` instead of NumPy's generic ValueError.
- Plain numbers and single elements are accepted on either side of an
  operator and broadcast to every position.
- Shape-changing ops (reshape, transpose, indexing) never copy elements;
  the resulting tensor references the same element objects.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterator, List, Sequence, Union

import numpy as np

from ...domain._errors import ShapeMismatchError, TensorShapeError, _product
from ...domain._tensor import ITensor
from .. import _elements as el
from ..autodiff._node import Node
from ._storage import as_array, normalize, scalar_array, to_storage
from .mixins import TensorMixinLinalg, TensorMixinReduction, TensorMixinUnary

Number = Union[int, float]


class Tensor(TensorMixinReduction, TensorMixinUnary, TensorMixinLinalg, ITensor):
    """
    Shaped container of elements.

    Parameters
    ----------
    data : array_like
        Initial contents. Nested sequences, NumPy arrays and existing tensors
        are accepted. Numeric data is stored as ``float64``; anything else as
        ``object``.

    Notes
    -----
    Prefer the factory classmethods (`from_vec`, `fill_with_clone`, `zeros`,
    `ones`, `leaves`) over calling the constructor with nested lists.
    """

    # NumPy defers to Tensor's reflected operators.
    __array_ufunc__ = None

    def __init__(self, data: Any) -> None:
        if isinstance(data, Tensor):
            arr = data._data
        elif isinstance(data, np.ndarray):
            arr = data
        else:
            arr = np.asarray(data, dtype=object)
        self._data: np.ndarray = normalize(arr)

    @classmethod
    def _from_array(cls, arr: Any) -> "Tensor":
        """Wrap an ndarray produced by an op without re-normalizing it."""
        arr = as_array(arr)
        if arr.dtype != object and arr.dtype != np.float64:
            arr = arr.astype(np.float64)
        t = cls.__new__(cls)
        t._data = arr
        return t

    def _new(self, arr: Any) -> "Tensor":
        """Result tensors of ops are plain `Tensor`s, whatever the receiver type."""
        return Tensor._from_array(arr)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def from_vec(cls, shape: Sequence[int], data: Sequence[Any]) -> "Tensor":
        """
        Create a tensor from a shape and a flat, row-major element list.

        Parameters
        ----------
        shape : Sequence[int]
            Target shape.
        data : Sequence[Any]
            Flat elements. Its length must equal the product of `shape`.

        Returns
        -------
        Tensor
            The new tensor.

        Raises
        ------
        TensorShapeError
            If ``len(data) != prod(shape)``.
        """
        shape = tuple(int(d) for d in shape)
        data = list(data)
        if _product(shape) != len(data):
            raise TensorShapeError(shape, len(data))
        return cls._from_array(to_storage(data).reshape(shape))

    @classmethod
    def fill_with_clone(cls, shape: Sequence[int], element: Any) -> "Tensor":
        """
        Create a tensor where every position holds an independent clone of
        `element`.
        """
        shape = tuple(int(d) for d in shape)
        n = _product(shape)
        if el.is_number(element):
            return cls._from_array(np.full(shape, element, dtype=np.float64))
        clone = getattr(element, "clone", None)
        items = [clone() if callable(clone) else copy.copy(element) for _ in range(n)]
        return cls._from_array(to_storage(items).reshape(shape))

    @classmethod
    def zeros(cls, shape: Sequence[int]) -> "Tensor":
        return cls._from_array(np.zeros(tuple(shape), dtype=np.float64))

    @classmethod
    def ones(cls, shape: Sequence[int]) -> "Tensor":
        return cls._from_array(np.ones(tuple(shape), dtype=np.float64))

    @classmethod
    def leaves(cls, values: Any) -> "Tensor":
        """
        Create a tensor of fresh leaf nodes from numeric values.

        Parameters
        ----------
        values : array_like
            Numbers with the desired shape.

        Returns
        -------
        Tensor
            Tensor with the same shape whose elements are new `Node` leaves.
        """
        arr = np.asarray(values, dtype=np.float64)
        out = np.empty(arr.shape, dtype=object)
        flat_in = arr.reshape(-1)
        flat_out = out.reshape(-1)
        for i, v in enumerate(flat_in):
            flat_out[i] = Node(v)
        return cls._from_array(out)

    @staticmethod
    def concat(tensors: Sequence["Tensor"], dim: int = -1) -> "Tensor":
        """
        Concatenate tensors along an existing dimension.

        Raises
        ------
        ShapeMismatchError
            If the tensors disagree on any dimension other than `dim`.
        """
        tensors = list(tensors)
        if not tensors:
            raise ValueError("concat() requires at least one tensor")
        arrays = [t._data for t in tensors]
        if any(a.dtype == object for a in arrays):
            arrays = [a.astype(object) for a in arrays]
        try:
            out = np.concatenate(arrays, axis=dim)
        except ValueError as e:
            raise ShapeMismatchError(
                "concat", tensors[0].shape, tensors[-1].shape
            ) from e
        return Tensor._from_array(out)

    # ------------------------------------------------------------------
    # Shape and element access
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._data.shape)

    @property
    def ndim(self) -> int:
        return self._data.ndim

    @property
    def size(self) -> int:
        return int(self._data.size)

    @property
    def dtype(self) -> np.dtype:
        """``float64`` for numeric tensors, ``object`` for element tensors."""
        return self._data.dtype

    @property
    def is_numeric(self) -> bool:
        return self._data.dtype != object

    def elements(self) -> Iterator[Any]:
        """Iterate over the stored elements in row-major order."""
        return iter(self._data.reshape(-1).tolist())

    def tolist(self) -> List[Any]:
        """Nested lists of the stored elements."""
        return self._data.tolist()

    def item(self) -> Any:
        """
        Return the only element of a single-element tensor.

        Raises
        ------
        ValueError
            If the tensor does not hold exactly one element.
        """
        if self.size != 1:
            raise ValueError(
                f"item() requires a single-element tensor, got shape {self.shape}"
            )
        return self._data.reshape(-1)[0]

    def to_numpy(self) -> np.ndarray:
        """
        Return forward values as a ``float64`` array.

        Node elements contribute their value; numeric tensors are copied.
        """
        if self.is_numeric:
            return self._data.copy()
        flat = [el.scalar_value(x) for x in self._data.reshape(-1)]
        return np.asarray(flat, dtype=np.float64).reshape(self.shape)

    def grad_numpy(self) -> np.ndarray:
        """
        Return the gradients of node elements as a ``float64`` array.

        Elements without a gradient (unreached nodes, plain numbers) read as
        ``0.0``.
        """
        flat = []
        for x in self._data.reshape(-1):
            g = getattr(x, "grad", None)
            flat.append(0.0 if g is None else el.scalar_value(g))
        return np.asarray(flat, dtype=np.float64).reshape(self.shape)

    def __getitem__(self, key: Any) -> Any:
        """
        Index the tensor.

        Full integer indices return the element itself; partial keys and
        slices return a `Tensor` sharing the same elements.
        """
        result = self._data[key]
        if isinstance(result, np.ndarray):
            return self._new(result)
        return result

    def __setitem__(self, key: Any, value: Any) -> None:
        if isinstance(value, Tensor):
            src = value._data
            needs_object = src.dtype == object
        else:
            src = el.as_element(value)
            needs_object = not el.is_number(src)
        if needs_object and self._data.dtype != object:
            self._data = self._data.astype(object)
        self._data[key] = src

    def __len__(self) -> int:
        if self.ndim == 0:
            raise TypeError("len() of a 0-d tensor")
        return self.shape[0]

    # ------------------------------------------------------------------
    # Element-wise arithmetic
    # ------------------------------------------------------------------
    def _binary(self, other: Any, op: str, ufunc: Callable, reflected: bool = False) -> "Tensor":
        other_arr = other._data if isinstance(other, Tensor) else scalar_array(el.as_element(other))
        try:
            np.broadcast_shapes(self._data.shape, other_arr.shape)
        except ValueError as e:
            a, b = (other_arr.shape, self.shape) if reflected else (self.shape, other_arr.shape)
            raise ShapeMismatchError(op, a, b) from e
        lhs, rhs = (other_arr, self._data) if reflected else (self._data, other_arr)
        with el.ieee():
            out = ufunc(lhs, rhs)
        return self._new(out)

    def __add__(self, other: Any) -> "Tensor":
        return self._binary(other, "add", np.add)

    def __radd__(self, other: Any) -> "Tensor":
        return self._binary(other, "add", np.add, reflected=True)

    def __mul__(self, other: Any) -> "Tensor":
        return self._binary(other, "mul", np.multiply)

    def __rmul__(self, other: Any) -> "Tensor":
        return self._binary(other, "mul", np.multiply, reflected=True)

    def __truediv__(self, other: Any) -> "Tensor":
        return self._binary(other, "div", np.true_divide)

    def __rtruediv__(self, other: Any) -> "Tensor":
        return self._binary(other, "div", np.true_divide, reflected=True)

    def __neg__(self) -> "Tensor":
        return self._new(np.negative(self._data))

    def __sub__(self, other: Any) -> "Tensor":
        if isinstance(other, Tensor):
            return self + (-other)
        return self + el.negate(el.as_element(other))

    def __rsub__(self, other: Any) -> "Tensor":
        return (-self) + other

    # ------------------------------------------------------------------
    # Autodiff entrypoint
    # ------------------------------------------------------------------
    def backward(self, seed: Any = 1.0, mode: Any = None) -> "Tensor":
        """
        Back-propagate from the single node held by this tensor.

        Raises
        ------
        ValueError
            If the tensor does not hold exactly one `Node`.
        """
        root = self.item()
        if not isinstance(root, Node):
            raise ValueError("backward() requires a tensor holding a Node element")
        root.backward(seed, mode)
        return self

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Tensor(shape={self.shape}, dtype={self.dtype})"

    def __str__(self) -> str:
        return np.array2string(self.to_numpy())
