"""
Trainable parameter interface definitions.

This module defines the domain-level interface for trainable parameters used
by optimization algorithms. A parameter is a tensor whose elements are leaf
nodes of the computation graph; gradients are read off those leaves after a
backward pass.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class IParameter(Protocol):
    """
    Domain-level interface for trainable parameters.

    Notes
    -----
    - `nodes()` exposes the graph leaves backing the parameter; optimizers
      read `grad` from and write `value` to these leaves.
    - `zero_grad()` clears every leaf gradient. No automatic reset happens
      between training steps.
    """

    def nodes(self) -> Iterable[object]:
        """
        Return the leaf nodes backing this parameter, in row-major order.

        Returns
        -------
        Iterable[object]
            Leaf nodes (the protocol does not constrain their type to keep the
            domain layer independent of the autodiff implementation).
        """
        ...

    def zero_grad(self) -> None:
        """
        Clear the stored gradient of every leaf.
        """
        ...
