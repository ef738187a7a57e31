from .weight_initializer import WeightInitializer

__all__ = [WeightInitializer.__name__]
