"""
Domain contracts for nodegrad.

Backend-agnostic protocols, abstract bases and error types. Nothing in this
package depends on NumPy or on the infrastructure implementations.
"""

from ._element import IElement, IRealElement
from ._tensor import ITensor
from ._parameter import IParameter
from ._module import IModule
from ._optimizers import IOptimizer
from ._errors import (
    GradientNotSetError,
    ImmutableNodeError,
    ShapeMismatchError,
    TensorShapeError,
)

__all__ = [
    IElement.__name__,
    IRealElement.__name__,
    ITensor.__name__,
    IParameter.__name__,
    IModule.__name__,
    IOptimizer.__name__,
    GradientNotSetError.__name__,
    ImmutableNodeError.__name__,
    ShapeMismatchError.__name__,
    TensorShapeError.__name__,
]
