"""
Stochastic Gradient Descent (SGD) optimizer implementation.

The optimizer updates leaf nodes in-place from the gradients left on them by
the latest backward pass, with an optional step-decay schedule and classical
L2 regularization (coupled weight decay).

Design notes
------------
- The optimizer manages a flat list of leaf nodes. Parameters, modules and
  bare leaves are all accepted at construction and flattened.
- Leaves with ``grad is None`` are skipped to support partial graphs.
- Parameters with ``requires_grad=False`` are excluded when passed as
  `Parameter`s.
- Gradients are never reset automatically; call `zero_grad()` (or rely on
  the next backward pass overwriting them) between steps.

Learning-rate schedule
----------------------
When `max_itr` is given, the learning rate is divided by 10 once the
iteration index passed to `step` exceeds ``(3 * max_itr) // 4``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .. import _elements as el
from ..autodiff._node import Node
from .._parameter import Parameter

logger = logging.getLogger(__name__)

LR_DECAY_FACTOR = 0.1


def _collect_leaves(params: Iterable[Any]) -> List[Node]:
    leaves: List[Node] = []
    for p in params:
        if isinstance(p, Node):
            leaves.append(p)
        elif isinstance(p, Parameter):
            if p.requires_grad:
                leaves.extend(p.nodes())
        elif callable(getattr(p, "params", None)):
            leaves.extend(_collect_leaves(p.parameters()))
        else:
            raise TypeError(
                f"SGD expects Parameters, Modules or Nodes, got {type(p).__name__}"
            )
    return leaves


@dataclass
class SGD:
    """
    Stochastic Gradient Descent optimizer.

    Update rule
    -----------
    For each leaf ``p`` with gradient ``g`` at iteration ``itr``:

    - If ``weight_decay > 0``: ``g <- g + weight_decay * p``
    - ``p <- p - lr_at(itr) * g``

    Parameters
    ----------
    params : Iterable
        Parameters, modules (their parameters are collected) or leaf nodes.
    lr : float, optional
        Base learning rate. Must be positive. Defaults to 1e-3.
    max_itr : int, optional
        Total number of iterations; enables the step-decay schedule.
    weight_decay : float, optional
        Classical L2 coefficient. Must be non-negative. Defaults to 0.0.
    """

    params: List[Node]
    lr: float = 1e-3
    max_itr: Optional[int] = None
    weight_decay: float = 0.0

    def __init__(
        self,
        params: Iterable[Any],
        lr: float = 1e-3,
        max_itr: Optional[int] = None,
        weight_decay: float = 0.0,
    ) -> None:
        """
        Construct an SGD optimizer.

        Raises
        ------
        ValueError
            If ``lr <= 0``, ``weight_decay < 0`` or ``max_itr <= 0``.
        TypeError
            If `params` contains an unsupported object.
        """
        self.params = _collect_leaves(params)
        self.lr = float(lr)
        self.max_itr = None if max_itr is None else int(max_itr)
        self.weight_decay = float(weight_decay)

        if self.lr <= 0.0:
            raise ValueError(f"lr must be > 0, got {self.lr}")
        if self.weight_decay < 0.0:
            raise ValueError(f"weight_decay must be >= 0, got {self.weight_decay}")
        if self.max_itr is not None and self.max_itr <= 0:
            raise ValueError(f"max_itr must be > 0, got {self.max_itr}")

        self._decayed = False

    def lr_at(self, itr: Optional[int] = None) -> float:
        """
        Learning rate used at iteration `itr`.

        Without `max_itr` or `itr`, the base rate is returned.
        """
        if self.max_itr is None or itr is None:
            return self.lr
        if itr > (3 * self.max_itr) // 4:
            return self.lr * LR_DECAY_FACTOR
        return self.lr

    def zero_grad(self, set_to_none: bool = False) -> None:
        """
        Reset the gradient of every managed leaf.

        Parameters
        ----------
        set_to_none : bool, optional
            Clear gradients to None (leaves then get skipped by `step` unless
            a backward pass reaches them) instead of setting them to 0.0.
        """
        for p in self.params:
            if set_to_none:
                p.zero_grad()
            else:
                p.set_grad(0.0)

    def step(self, itr: Optional[int] = None) -> None:
        """
        Apply one SGD update to all managed leaves.

        Parameters
        ----------
        itr : int, optional
            Current iteration index, used by the decay schedule.
        """
        lr = self.lr_at(itr)
        if lr != self.lr and not self._decayed:
            self._decayed = True
            logger.debug("SGD learning rate decayed to %g at iteration %s", lr, itr)

        for p in self.params:
            g = p.grad
            if g is None:
                continue
            if self.weight_decay != 0.0:
                g = el.add(g, el.mul(self.weight_decay, p.value))
            p.set_value(el.add(p.value, el.mul(-lr, g)))
