"""
nodegrad: scalar reverse-mode autodiff with generic tensors, attention and
transformer layers, and an SGD optimizer, on top of NumPy.
"""

from .domain import (
    GradientNotSetError,
    IElement,
    IRealElement,
    ImmutableNodeError,
    ShapeMismatchError,
    TensorShapeError,
)
from .infrastructure import *
from .infrastructure import __all__ as _infrastructure_all

__version__ = "0.1.0"

__all__ = [
    GradientNotSetError.__name__,
    IElement.__name__,
    IRealElement.__name__,
    ImmutableNodeError.__name__,
    ShapeMismatchError.__name__,
    TensorShapeError.__name__,
    *_infrastructure_all,
]
