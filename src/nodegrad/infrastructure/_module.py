"""
Infrastructure module base class.

This module provides a concrete `Module` implementation that satisfies the
domain-level `IModule` protocol. It implements common conveniences used by
neural network layers, including:

- parameter registration and storage
- submodule registration and storage
- recursive parameter traversal (`parameters`, `named_parameters`, `params`)
- `__call__` forwarding to `forward` for ergonomic invocation

This class is part of the infrastructure layer and is intended to be subclassed
by concrete layers (e.g., Linear, activations, attention, transformer blocks).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Iterator, List, Optional

from ..domain._module import IModule
from .autodiff._node import Node
from ._parameter import Parameter


class Module(IModule):
    """
    Infrastructure base class for layers/modules.

    Subclasses typically:
    - create `Parameter` instances,
    - register them (explicitly via `register_parameter` or implicitly via
      attribute assignment),
    - implement `forward` to define computation.

    Attributes
    ----------
    _parameters : Dict[str, Parameter]
        Mapping from parameter name to parameter object for this module.
    _modules : Dict[str, Module]
        Mapping from child module name to child module object for this module.

    Notes
    -----
    - Traversal is recursive over registered submodules, in registration order.
    - Lists of submodules (e.g., attention heads) are registered with
      `register_module` under indexed names.
    """

    def __init__(self) -> None:
        # Bypass our __setattr__ for the registries themselves.
        super().__setattr__("_parameters", {})
        super().__setattr__("_modules", {})

    def __setattr__(self, name: str, value) -> None:
        """
        Intercept attribute assignment to auto-register Parameters and child
        Modules.
        """
        if name in {"_parameters", "_modules"}:
            super().__setattr__(name, value)
            return

        # Assigning None unregisters.
        if value is None:
            self._parameters.pop(name, None)
            self._modules.pop(name, None)
            super().__setattr__(name, value)
            return

        if isinstance(value, Parameter):
            self._parameters[name] = value
        elif isinstance(value, Module):
            self._modules[name] = value

        super().__setattr__(name, value)

    def register_parameter(self, name: str, param: Optional[Parameter]) -> None:
        """
        Register a parameter with this module.

        If `param` is None, nothing is registered. Existing names are
        overwritten.
        """
        if param is None:
            return
        self._parameters[name] = param
        super().__setattr__(name, param)

    def register_module(self, name: str, module: Optional["Module"]) -> None:
        """
        Register a child module with this module.

        If `module` is None, nothing is registered.
        """
        if module is None:
            return
        self._modules[name] = module
        super().__setattr__(name, module)

    def parameters(self) -> Iterable[Parameter]:
        """
        Return an iterable over this module's parameters (recursive).

        Own parameters come first, then those of each submodule.
        """
        for p in self._parameters.values():
            yield p
        for m in self._modules.values():
            yield from m.parameters()

    def named_parameters(self, prefix: str = "") -> Iterator[tuple[str, Parameter]]:
        """
        Return an iterator over ``(qualified_name, parameter)`` pairs.

        Parameters
        ----------
        prefix : str
            Prefix to prepend to parameter names (used for recursion).
        """
        base = prefix + "." if prefix else ""

        for name, p in self._parameters.items():
            yield (f"{base}{name}", p)

        for child_name, child in self._modules.items():
            yield from child.named_parameters(f"{base}{child_name}")

    def params(self) -> List[Node]:
        """
        Flat list of every leaf node backing this module's parameters.

        This is the list an optimizer updates.
        """
        return [leaf for p in self.parameters() for leaf in p.nodes()]

    def zero_grad(self) -> None:
        for p in self.parameters():
            p.zero_grad()

    def forward(self, x):
        """
        Execute the forward computation of the module.

        Subclasses must implement this.
        """
        raise NotImplementedError

    def __call__(self, x):
        return self.forward(x)
