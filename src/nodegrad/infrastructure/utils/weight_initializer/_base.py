"""
Weight initializer registry and dispatch utilities.

This module defines the concrete `WeightInitializer` used by layers to apply
registered initialization strategies (e.g. Kaiming, Xavier) to `Parameter`
instances.

Design
------
- Initializers are registered by string name via a decorator-based registry.
- Each initializer is a callable ``init(param, rng=None)`` that overwrites the
  parameter's leaf values *in-place* and returns it.
- `rng` is a `numpy.random.Generator`; passing a seeded generator makes the
  draw reproducible. Without one, a fresh unseeded generator is used.

Usage example
-------------
Registering an initializer:

    @WeightInitializer.register_initializer("kaiming")
    def kaiming(param, rng=None):
        ...

Applying an initializer:

    init = WeightInitializer("kaiming")
    init(weight, rng=np.random.default_rng(0))
"""

from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional, TypeVar

import numpy as np

from ....domain.utils._weight_initialization import _WeightInitializer
from ..._parameter import Parameter

T = TypeVar("T", bound=Callable[..., Parameter])


class WeightInitializer(_WeightInitializer):
    """
    Registry-backed weight initializer dispatcher.

    Notes
    -----
    - Initializers are stored by string name in a class-level registry.
    - The initializer callable should mutate `param` in-place and return it.
    """

    INITIALIZERS: ClassVar[Dict[str, Callable[..., Parameter]]] = {}

    def __init__(self, initializer_name: str) -> None:
        try:
            self._initializer: Callable[..., Parameter] = self.INITIALIZERS[
                initializer_name
            ]
        except KeyError as e:
            available = ", ".join(sorted(self.INITIALIZERS)) or "<none>"
            raise ValueError(
                f"Unsupported initializer name: {initializer_name!r}. "
                f"Available: {available}"
            ) from e
        self.name = initializer_name

    @classmethod
    def register_initializer(
        cls, name: str, *, overwrite: bool = False
    ) -> Callable[[T], T]:
        """
        Decorator to register a weight initializer under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the initializer later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(func: T) -> T:
            if not overwrite and name in cls.INITIALIZERS:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.INITIALIZERS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered initializer names (sorted)."""
        return tuple(sorted(cls.INITIALIZERS))

    @classmethod
    def get(cls, name: str) -> Callable[..., Parameter]:
        """Get a registered initializer callable by name."""
        return cls.INITIALIZERS[name]

    def __call__(
        self, tensor: Parameter, rng: Optional[np.random.Generator] = None
    ) -> Parameter:
        return self._initializer(tensor, rng)


def _generator(rng: Optional[Any]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()
