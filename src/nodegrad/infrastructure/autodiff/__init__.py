"""
Reverse-mode automatic differentiation over scalar computation graphs.
"""

from ._node import Node, NodeOp
from ._rules import BackwardRules
from ._engine import propagate

__all__ = [
    Node.__name__,
    NodeOp.__name__,
    BackwardRules.__name__,
    propagate.__name__,
]
