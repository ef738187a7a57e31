"""
Computation-graph nodes for reverse-mode automatic differentiation.

A `Node` is a vertex of a dynamically built computation graph. Each node
carries:

- ``value``: the forward result, computed eagerly when the node is created
  and never recomputed afterwards,
- ``grad``: an optional gradient, ``None`` until a backward pass reaches it,
- ``operands``: zero, one or two child nodes, fixed at construction.

The producing operation is recorded as a `NodeOp` tag drawn from a closed
set. Arithmetic operators and math methods are pure constructors: given
existing nodes they compute a new value and return a *new* parent node that
references its operands. Construction never touches gradients, and because
every operator only consumes already-built nodes the graph is acyclic by
construction.

Sharing
-------
Operands are held by reference. A node may be the operand of several parents
(a reused weight, a diamond-shaped subexpression, ``x * x``). The backward
engine (see `_engine`) decides how contributions from multiple parents are
combined; the default sums them.

Element contract
----------------
`Node` satisfies `IRealElement` itself (``+ * /``, ``exp``, ``ln``, ``pow``,
string form, clone), so it can be used as the element type of a `Tensor`.
Plain numbers appearing on either side of an operator are lifted to constant
leaves.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Tuple

from ...domain._errors import GradientNotSetError, ImmutableNodeError
from .. import _elements as el

logger = logging.getLogger(__name__)


class NodeOp(str, Enum):
    """
    Closed set of node variants.

    Each variant has exactly one backward rule registered in `_rules`.
    Operand order is significant for `QUOTIENT` (numerator, denominator) and
    `POWER` (base, exponent).
    """

    LEAF = "leaf"
    SUM = "sum"
    PRODUCT = "product"
    QUOTIENT = "quotient"
    EXPONENTIAL = "exponential"
    NATURAL_LOG = "natural_log"
    POWER = "power"


class Node:
    """
    A vertex in the computation graph.

    Parameters
    ----------
    value : Any
        Forward value of the leaf. Python numbers are stored as
        ``numpy.float64`` so that arithmetic follows IEEE special-value rules.
    grad : Any, optional
        Initial gradient. Defaults to None.

    Notes
    -----
    - The public constructor always builds a `LEAF`. Interior nodes are
      produced by operators (``+``, ``*``, ``/``, ``**``) and by `exp`,
      `ln` and `pow`.
    - Nodes compare and hash by identity so they can key gradient tables.
    """

    __slots__ = ("_op", "_value", "_grad", "_operands", "__weakref__")

    # NumPy scalars and arrays defer to the reflected operators below instead
    # of trying to coerce a node into an array.
    __array_ufunc__ = None

    def __init__(self, value: Any, grad: Any = None) -> None:
        self._op: NodeOp = NodeOp.LEAF
        self._value = el.as_element(value)
        self._grad = None if grad is None else el.as_element(grad)
        self._operands: Tuple["Node", ...] = ()

    @classmethod
    def _from_op(cls, op: NodeOp, value: Any, operands: Tuple["Node", ...]) -> "Node":
        node = cls.__new__(cls)
        node._op = op
        node._value = value
        node._grad = None
        node._operands = tuple(operands)
        return node

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def value(self) -> Any:
        """Forward value computed at construction time."""
        return self._value

    @property
    def grad(self) -> Optional[Any]:
        """Gradient written by the last backward pass, or None."""
        return self._grad

    @property
    def op(self) -> NodeOp:
        return self._op

    @property
    def operands(self) -> Tuple["Node", ...]:
        return self._operands

    @property
    def is_leaf(self) -> bool:
        return self._op is NodeOp.LEAF

    def set_grad(self, grad: Any) -> None:
        """
        Overwrite the stored gradient unconditionally.

        Parameters
        ----------
        grad : Any
            New gradient value.
        """
        self._grad = el.as_element(grad)

    def zero_grad(self) -> None:
        """Clear the stored gradient (back to None)."""
        self._grad = None

    def set_value(self, value: Any) -> None:
        """
        Overwrite the forward value of a leaf.

        Optimizers use this to update parameters between training steps.
        Interior nodes are immutable.

        Raises
        ------
        ImmutableNodeError
            If this node is not a leaf.
        """
        if not self.is_leaf:
            raise ImmutableNodeError(self._op.value)
        self._value = el.as_element(value)

    def clone(self) -> "Node":
        """
        Return a new node with the same variant, value and gradient.

        Operands are shared with the original, not copied. A cloned leaf is a
        distinct leaf: gradients reaching the clone are not written to the
        original.
        """
        node = type(self)._from_op(self._op, self._value, self._operands)
        node._grad = self._grad
        return node

    __copy__ = clone

    # ------------------------------------------------------------------
    # Backward entrypoints
    # ------------------------------------------------------------------
    def backward(self, seed: Any = 1.0, mode: Any = None) -> "Node":
        """
        Seed this node's gradient and propagate it to every reachable node.

        Parameters
        ----------
        seed : Any, optional
            Upstream gradient of the root, usually 1.0 for a scalar loss.
        mode : GradientMode or str, optional
            How contributions from multiple parents combine. Defaults to
            `GradientMode.ACCUMULATE`.

        Returns
        -------
        Node
            This node, to allow ``loss.backward(1.0).grad``-style chaining.

        Notes
        -----
        Gradients left by an earlier pass are overwritten on every node the
        new pass reaches; there is no automatic reset of unreached nodes.
        """
        self.set_grad(seed)
        self.propagate_backward(mode)
        return self

    def propagate_backward(self, mode: Any = None) -> None:
        """
        Propagate this node's current gradient to its descendants.

        Raises
        ------
        GradientNotSetError
            If this node's gradient is None.
        """
        if self._grad is None:
            raise GradientNotSetError(repr(self))

        from ._engine import propagate

        propagate(self, mode)

    # ------------------------------------------------------------------
    # Graph-building operators
    # ------------------------------------------------------------------
    def __add__(self, other: Any) -> "Node":
        other = _lift(other)
        return Node._from_op(NodeOp.SUM, el.add(self._value, other._value), (self, other))

    def __radd__(self, other: Any) -> "Node":
        return _lift(other).__add__(self)

    def __mul__(self, other: Any) -> "Node":
        other = _lift(other)
        return Node._from_op(
            NodeOp.PRODUCT, el.mul(self._value, other._value), (self, other)
        )

    def __rmul__(self, other: Any) -> "Node":
        return _lift(other).__mul__(self)

    def __truediv__(self, other: Any) -> "Node":
        # Same division-by-zero behaviour as the underlying value type.
        other = _lift(other)
        return Node._from_op(
            NodeOp.QUOTIENT, el.div(self._value, other._value), (self, other)
        )

    def __rtruediv__(self, other: Any) -> "Node":
        return _lift(other).__truediv__(self)

    def __neg__(self) -> "Node":
        return Node(-1.0) * self

    def __sub__(self, other: Any) -> "Node":
        return self + (-_lift(other))

    def __rsub__(self, other: Any) -> "Node":
        return _lift(other) + (-self)

    def __pow__(self, other: Any) -> "Node":
        return self.pow(other)

    def __rpow__(self, other: Any) -> "Node":
        return _lift(other).pow(self)

    def exp(self) -> "Node":
        return Node._from_op(NodeOp.EXPONENTIAL, el.exp(self._value), (self,))

    def ln(self) -> "Node":
        return Node._from_op(NodeOp.NATURAL_LOG, el.ln(self._value), (self,))

    # NumPy object-dtype loops call ``log``.
    log = ln

    def pow(self, exponent: Any) -> "Node":
        """
        Raise this node to `exponent`.

        The base is stored as the first operand and the exponent as the
        second.
        """
        exponent = _lift(exponent)
        return Node._from_op(
            NodeOp.POWER, el.power(self._value, exponent._value), (self, exponent)
        )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node({self._op.value}, value={self._value}, grad={self._grad})"

    __str__ = __repr__

    def __float__(self) -> float:
        return el.scalar_value(self)


def _lift(x: Any) -> Node:
    """Return `x` if it is a node, otherwise wrap it in a constant leaf."""
    if isinstance(x, Node):
        return x
    return Node(x)
