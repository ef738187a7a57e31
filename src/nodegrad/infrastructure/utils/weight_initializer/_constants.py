"""
Constant weight initializers.

- ``zeros``: every leaf set to 0.
- ``ones``: every leaf set to 1.

Typically used for biases, tests and deterministic setups. The `rng`
argument is accepted for signature compatibility and ignored.
"""

from typing import Optional

import numpy as np

from ._base import WeightInitializer
from ..._parameter import Parameter


@WeightInitializer.register_initializer("zeros")
def zeros(param: Parameter, rng: Optional[np.random.Generator] = None) -> Parameter:
    return param.copy_from_numpy(np.zeros(param.shape, dtype=np.float64))


@WeightInitializer.register_initializer("ones")
def ones(param: Parameter, rng: Optional[np.random.Generator] = None) -> Parameter:
    return param.copy_from_numpy(np.ones(param.shape, dtype=np.float64))
