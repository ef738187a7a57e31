"""
Backward propagation engine.

Given a node whose gradient is set, distribute that gradient to every node
reachable through operand edges using the local rules in `_rules`.

Two strategies are provided, selected by `GradientMode`:

ACCUMULATE (default)
    The reachable subgraph is first collected into a flat arena: each node
    gets an integer handle, gradients live in a parallel list, and every
    handle carries a count of incoming parent edges. A ready queue is then
    drained in reverse-topological order, so a node is expanded only after
    all of its parents have contributed. Contributions are summed, which
    makes shared subexpressions (``x * x``, reused weights, diamonds) receive
    their full derivative.

OVERWRITE
    An explicit stack reproduces the recursive visit order "write every
    child's gradient from the current node's gradient, then descend into the
    first child, then the second". Each write replaces the previous value.

Both strategies are iterative; graph depth is not limited by the Python
recursion limit.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Dict, List, Optional

from .. import _elements as el
from .._config import GradientMode
from ._node import Node
from ._rules import BackwardRules

logger = logging.getLogger(__name__)

BackwardRules.check_complete()


class _GraphArena:
    """
    Flat view of the subgraph reachable from a root node.

    Attributes
    ----------
    nodes : list[Node]
        Nodes indexed by handle; the root is handle 0.
    children : list[list[int]]
        Operand handles per node, in operand order (duplicates preserved).
    pending : list[int]
        Number of parent edges not yet processed, per node.
    grads : list
        Gradient table, parallel to `nodes`.
    """

    def __init__(self, root: Node) -> None:
        self.nodes: List[Node] = [root]
        self.children: List[List[int]] = [[]]
        self.pending: List[int] = [0]
        self.grads: List[Optional[Any]] = [root.grad]

        handles: Dict[int, int] = {id(root): 0}
        stack = [0]
        while stack:
            h = stack.pop()
            for child in self.nodes[h].operands:
                ch = handles.get(id(child))
                if ch is None:
                    ch = len(self.nodes)
                    handles[id(child)] = ch
                    self.nodes.append(child)
                    self.children.append([])
                    self.pending.append(0)
                    self.grads.append(None)
                    stack.append(ch)
                self.children[h].append(ch)
                self.pending[ch] += 1

    def __len__(self) -> int:
        return len(self.nodes)

    def drain(self) -> None:
        """Process handles in reverse-topological order, summing contributions."""
        ready = deque([0])
        while ready:
            h = ready.popleft()
            node = self.nodes[h]
            if node.is_leaf:
                continue
            contributions = BackwardRules.apply(node, self.grads[h])
            for ch, cg in zip(self.children[h], contributions):
                current = self.grads[ch]
                self.grads[ch] = cg if current is None else el.add(current, cg)
                self.pending[ch] -= 1
                if self.pending[ch] == 0:
                    ready.append(ch)

    def write_back(self) -> None:
        for node, g in zip(self.nodes, self.grads):
            if g is not None:
                node.set_grad(g)


def _accumulate(root: Node) -> int:
    arena = _GraphArena(root)
    arena.drain()
    arena.write_back()
    return len(arena)


def _overwrite(root: Node) -> int:
    visited = 0
    stack = [root]
    while stack:
        node = stack.pop()
        visited += 1
        if node.is_leaf:
            continue
        operands = node.operands
        for child, cg in zip(operands, BackwardRules.apply(node, node.grad)):
            child.set_grad(cg)
        stack.extend(reversed(operands))
    return visited


def propagate(root: Node, mode: Any = None) -> None:
    """
    Propagate `root.grad` to every node reachable from `root`.

    Parameters
    ----------
    root : Node
        Starting node. Its gradient must already be set.
    mode : GradientMode or str, optional
        Combination semantics; defaults to `GradientMode.ACCUMULATE`.
    """
    mode = GradientMode.resolve(mode)
    if mode is GradientMode.ACCUMULATE:
        count = _accumulate(root)
    else:
        count = _overwrite(root)
    logger.debug("backward pass (%s) reached %d nodes", mode.value, count)
