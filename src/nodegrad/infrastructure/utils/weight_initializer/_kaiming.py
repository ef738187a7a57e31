"""
Kaiming (He) weight initializers.

Implemented variants
--------------------
- ``kaiming``:
    Kaiming normal initialization using ``std = sqrt(2 / fan_in)``.
- ``kaiming_relu``:
    Explicit alias for ReLU activations (same distribution).

Notes
-----
- Fan-in is computed from the weight shape via ``_calculate_fan_in``. Linear
  weights are ``(in_features, out_features)``, so fan-in is ``in_features``.
- All initializers mutate the provided parameter in-place and return it.
"""

import math
from typing import Optional

import numpy as np

from ._base import WeightInitializer, _generator
from ..._parameter import Parameter
from ....domain.utils._weight_initialization import _calculate_fan_in


def _kaiming_normal(param: Parameter, rng: Optional[np.random.Generator]) -> Parameter:
    fan_in = max(1, _calculate_fan_in(tuple(param.shape)))
    std = math.sqrt(2.0 / float(fan_in))
    w = _generator(rng).normal(0.0, std, size=param.shape)
    return param.copy_from_numpy(w)


@WeightInitializer.register_initializer("kaiming")
def kaiming(param: Parameter, rng: Optional[np.random.Generator] = None) -> Parameter:
    """
    Apply standard Kaiming (He) normal initialization.

        std = sqrt(2 / fan_in)

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
    return _kaiming_normal(param, rng)


@WeightInitializer.register_initializer("kaiming_relu")
def kaiming_relu(param: Parameter, rng: Optional[np.random.Generator] = None) -> Parameter:
    """Kaiming normal initialization for ReLU activations."""
    return _kaiming_normal(param, rng)
