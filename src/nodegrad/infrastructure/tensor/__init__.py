"""
Generic tensor over numeric or autodiff elements.
"""

from ._tensor import Tensor

__all__ = [Tensor.__name__]
