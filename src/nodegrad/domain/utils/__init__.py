from ._weight_initialization import (
    _WeightInitializer,
    _calculate_fan_in,
    _calculate_fan_in_and_fan_out,
)
