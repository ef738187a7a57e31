"""
Local backward rules for each node variant.

Every `NodeOp` has exactly one rule. A rule receives a node together with the
upstream gradient ``g`` reaching it and returns one contribution per operand,
in operand order. Rules only read forward values; they never mutate nodes.

Registry
--------
Rules are registered by variant with a decorator, in the same manner as
weight initializers:

    @BackwardRules.register(NodeOp.SUM)
    def _sum(node, g):
        return g, g

`BackwardRules.check_complete()` verifies that the closed variant set is fully
covered; the engine calls it once on import.

Rules
-----
For upstream gradient ``g`` and forward value ``v`` of the node:

- SUM ``a + b``:        ``(g, g)``
- PRODUCT ``a * b``:    ``(g * b, g * a)``
- QUOTIENT ``n / d``:   ``(g / d, -(g * n) / (d * d))``
- EXPONENTIAL ``e^a``:  ``(g * v,)``
- NATURAL_LOG ``ln a``: ``(g / a,)``
- POWER ``b ** e``:     ``(g * e * b ** (e - 1), g * v * ln b)``
- LEAF:                 ``()``
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Tuple, TypeVar

from .. import _elements as el
from ._node import Node, NodeOp

Rule = Callable[[Node, Any], Tuple[Any, ...]]
R = TypeVar("R", bound=Rule)


class BackwardRules:
    """
    Class-level registry mapping node variants to local backward rules.
    """

    RULES: ClassVar[Dict[NodeOp, Rule]] = {}

    @classmethod
    def register(cls, op: NodeOp, *, overwrite: bool = False) -> Callable[[R], R]:
        """
        Decorator registering a backward rule for `op`.

        Parameters
        ----------
        op:
            Variant the rule applies to.
        overwrite:
            If False (default), raises if `op` already has a rule.
        """
        if not isinstance(op, NodeOp):
            raise ValueError(f"Backward rules are keyed by NodeOp, got {op!r}")

        def decorator(func: R) -> R:
            if not overwrite and op in cls.RULES:
                raise ValueError(f"Backward rule already registered: {op.value!r}")
            cls.RULES[op] = func
            return func

        return decorator

    @classmethod
    def get(cls, op: NodeOp) -> Rule:
        return cls.RULES[op]

    @classmethod
    def check_complete(cls) -> None:
        """Raise if any variant is missing a rule."""
        missing = [op.value for op in NodeOp if op not in cls.RULES]
        if missing:
            raise RuntimeError(f"Missing backward rules for: {', '.join(missing)}")

    @classmethod
    def apply(cls, node: Node, g: Any) -> Tuple[Any, ...]:
        """Return the per-operand contributions of `node` for upstream `g`."""
        return cls.RULES[node.op](node, g)


@BackwardRules.register(NodeOp.LEAF)
def _leaf(node: Node, g: Any) -> Tuple[Any, ...]:
    return ()


@BackwardRules.register(NodeOp.SUM)
def _sum(node: Node, g: Any) -> Tuple[Any, ...]:
    return g, g


@BackwardRules.register(NodeOp.PRODUCT)
def _product(node: Node, g: Any) -> Tuple[Any, ...]:
    a, b = node.operands
    return el.mul(b.value, g), el.mul(a.value, g)


@BackwardRules.register(NodeOp.QUOTIENT)
def _quotient(node: Node, g: Any) -> Tuple[Any, ...]:
    num, den = node.operands
    n, d = num.value, den.value
    return (
        el.div(g, d),
        el.negate(el.div(el.mul(g, n), el.mul(d, d))),
    )


@BackwardRules.register(NodeOp.EXPONENTIAL)
def _exponential(node: Node, g: Any) -> Tuple[Any, ...]:
    return (el.mul(g, node.value),)


@BackwardRules.register(NodeOp.NATURAL_LOG)
def _natural_log(node: Node, g: Any) -> Tuple[Any, ...]:
    (a,) = node.operands
    return (el.div(g, a.value),)


@BackwardRules.register(NodeOp.POWER)
def _power(node: Node, g: Any) -> Tuple[Any, ...]:
    base, exponent = node.operands
    b, e = base.value, exponent.value
    # ln(b) is nan for b < 0; only the exponent's gradient is affected.
    return (
        el.mul(g, el.mul(e, el.power(b, el.add(e, -1.0)))),
        el.mul(g, el.mul(node.value, el.ln(b))),
    )
