"""
Xavier/Glorot weight initializers.

Implemented variants
--------------------
- ``xavier`` / ``xavier_normal``:
    Normal initialization using ``std = sqrt(2 / (fan_in + fan_out))``.
- ``xavier_uniform``:
    ``U(-sqrt(6/(fan_in+fan_out)), +sqrt(6/(fan_in+fan_out)))``.

Notes
-----
Fan-in and fan-out are computed from the weight shape via
``_calculate_fan_in_and_fan_out``.
"""

import math
from typing import Optional

import numpy as np

from ._base import WeightInitializer, _generator
from ..._parameter import Parameter
from ....domain.utils._weight_initialization import _calculate_fan_in_and_fan_out


def _fans(param: Parameter) -> tuple[int, int]:
    fan_in, fan_out = _calculate_fan_in_and_fan_out(tuple(param.shape))
    return max(1, int(fan_in)), max(1, int(fan_out))


@WeightInitializer.register_initializer("xavier")
@WeightInitializer.register_initializer("xavier_normal")
def xavier(param: Parameter, rng: Optional[np.random.Generator] = None) -> Parameter:
    """
    Apply Xavier (Glorot) normal initialization.

        std = sqrt(2 / (fan_in + fan_out))

    Parameters
    ----------
    param:
        The parameter to initialize in-place.
    rng:
        Optional random generator.

    Returns
    -------
    Parameter
        The initialized parameter (same object).
    """
    fan_in, fan_out = _fans(param)
    std = math.sqrt(2.0 / float(fan_in + fan_out))
    w = _generator(rng).normal(0.0, std, size=param.shape)
    return param.copy_from_numpy(w)


@WeightInitializer.register_initializer("xavier_uniform")
def xavier_uniform(param: Parameter, rng: Optional[np.random.Generator] = None) -> Parameter:
    """
    Apply Xavier (Glorot) uniform initialization.

        U(-bound, +bound), where bound = sqrt(6 / (fan_in + fan_out))
    """
    fan_in, fan_out = _fans(param)
    bound = math.sqrt(6.0 / float(fan_in + fan_out))
    w = _generator(rng).uniform(-bound, bound, size=param.shape)
    return param.copy_from_numpy(w)
