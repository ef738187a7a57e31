"""
Element capability contracts.

This module defines the domain-level interfaces that every tensor element
must satisfy, using structural typing (`typing.Protocol`). Two levels exist:

- `IElement` captures closed arithmetic: addition, multiplication, division
  and a printable representation. Plain Python/NumPy numbers satisfy it out
  of the box.
- `IRealElement` extends `IElement` with "real number like" behaviour:
  exponential, natural logarithm and power.

Both raw numeric types and the autodiff `Node` satisfy these contracts. This
is what allows a `Node` to be used as the element type of a tensor, giving
differentiable tensors without a separate graph type.

Notes
-----
- Cloning is expressed through `copy.copy` (numbers) or `Node.clone()`;
  it is not part of the structural check because builtin numbers expose no
  method for it.
- In-place addition (``+=``) is Python's rebinding form ``a = a + b`` for
  every element type, so it is not listed separately either.
- Division by zero and logarithms of non-positive values follow the
  underlying IEEE representation (``inf``, ``nan``) rather than raising.
"""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class IElement(Protocol):
    """
    Minimal arithmetic contract for tensor elements.

    Any object implementing ``+``, ``*``, ``/`` (each returning the same
    element type) and a string form is a valid element.
    """

    def __add__(self, other): ...

    def __mul__(self, other): ...

    def __truediv__(self, other): ...

    def __str__(self) -> str: ...


@runtime_checkable
class IRealElement(IElement, Protocol):
    """
    Element contract extended with real-valued functions.

    Required methods
    ----------------
    - `exp()` returns ``e ** self``.
    - `ln()` returns the natural logarithm of ``self``.
    - `pow(exponent)` returns ``self ** exponent``.

    Notes
    -----
    Builtin numbers do not carry these methods; the infrastructure helpers
    `exp`, `ln` and `power` in ``nodegrad.infrastructure._elements`` provide
    them for plain numbers, so numeric code can treat both uniformly.
    """

    def exp(self) -> "IRealElement": ...

    def ln(self) -> "IRealElement": ...

    def pow(self, exponent: "IRealElement") -> "IRealElement": ...
