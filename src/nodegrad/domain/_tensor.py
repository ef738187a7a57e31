"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. A tensor here is a shaped container that is generic over
its element type: elements may be plain numbers or autodiff `Node`s, and
every operation is expressed elementwise through the element contract
(`IElement` / `IRealElement`).

Notes
-----
The protocol mirrors the public surface of the infrastructure `Tensor` so
that layers, losses and optimizers can type against it without importing
the concrete implementation.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Protocol, Sequence, Union, runtime_checkable

from ._element import IElement

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` represents a multi-dimensional array of elements. When the
    elements are autodiff nodes, every tensor operation builds graph nodes as
    a side effect, so forward evaluation and graph construction are fused.
    """

    # ---------------------------------------------------------------------
    # Shape and storage
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        ...

    def elements(self) -> Iterator[IElement]:
        """
        Iterate over the elements in row-major order.

        Returns
        -------
        Iterator[IElement]
            The stored elements (not copies).
        """
        ...

    def to_numpy(self) -> Any:
        """
        Return the forward values as a float NumPy array.

        For node elements, this reads each node's value; for numeric elements
        it returns a copy of the storage.
        """
        ...

    def reshape(self, new_shape: Sequence[int]) -> "ITensor":
        """
        Return a tensor with the same elements arranged in `new_shape`.
        """
        ...

    def __getitem__(self, key: Any) -> Any:
        """
        Return the element at an index tuple, or a sub-tensor for partial keys.
        """
        ...

    # ---------------------------------------------------------------------
    # Elementwise arithmetic
    # ---------------------------------------------------------------------
    def __add__(self, other: Union["ITensor", IElement, Number]) -> "ITensor": ...

    def __mul__(self, other: Union["ITensor", IElement, Number]) -> "ITensor": ...

    def __truediv__(self, other: Union["ITensor", IElement, Number]) -> "ITensor": ...

    # ---------------------------------------------------------------------
    # Linear algebra and reductions
    # ---------------------------------------------------------------------
    def matmul(self, other: "ITensor") -> "ITensor":
        """
        Matrix multiplication over the last two dimensions.
        """
        ...

    def transpose(self) -> "ITensor":
        """
        Swap the last two dimensions.
        """
        ...

    def dim_sum(self, dims: Sequence[int], keepdims: bool = False) -> "ITensor":
        """
        Sum across one or more dimensions.
        """
        ...

    def sum(self) -> IElement:
        """
        Sum of every element, returned as a single element.
        """
        ...

    # ---------------------------------------------------------------------
    # Real-valued functions
    # ---------------------------------------------------------------------
    def exp(self) -> "ITensor": ...

    def ln(self) -> "ITensor": ...

    def softmax(self, dim: int, mask: Optional["ITensor"] = None) -> "ITensor":
        """
        Softmax across one dimension, leaving the shape unchanged.
        """
        ...
