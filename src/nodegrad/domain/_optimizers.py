"""
Domain-level optimizer contracts for nodegrad.

This module defines the `IOptimizer` protocol, which specifies the minimal
interface required for optimizer implementations (e.g., SGD).

Notes
-----
- Domain contracts are backend-agnostic and must not depend on NumPy or
  infrastructure implementations.
- Optimizers update leaf values from the gradients left on them by a single
  backward pass. Gradient computation itself is the autodiff engine's job.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class IOptimizer(Protocol):
    """
    Optimizer interface contract.

    An optimizer holds references to trainable leaves and updates them
    in-place according to a specific optimization rule.

    Required methods
    ----------------
    - `step(itr)` applies one optimization update to managed leaves.
    - `zero_grad()` clears gradients for managed leaves.
    """

    def step(self, itr: Optional[int] = None) -> None:
        """
        Apply one optimization step.

        Implementations should skip leaves that do not currently have
        gradients (``grad is None``).
        """
        ...

    def zero_grad(self) -> None:
        """
        Clear gradients for all managed leaves.
        """
        ...

    @property
    def params(self) -> Iterable[object]:
        """
        Return the leaves managed by this optimizer.
        """
        ...
