"""
Concrete implementations: autodiff engine, tensor, layers, losses and
optimizers.
"""

from ._config import GradientMode, TransformerConfig
from .autodiff import BackwardRules, Node, NodeOp
from .tensor import Tensor
from ._parameter import Parameter
from ._module import Module
from ._linear import Linear
from ._activations import ReLU, Sigmoid, Softmax, Tanh
from ._attention import MultiHeadAttention
from ._transformer import TransformerBlock
from ._losses import bce, cce, mse, sse
from .optimizers import SGD
from .utils import WeightInitializer

__all__ = [
    GradientMode.__name__,
    TransformerConfig.__name__,
    BackwardRules.__name__,
    Node.__name__,
    NodeOp.__name__,
    Tensor.__name__,
    Parameter.__name__,
    Module.__name__,
    Linear.__name__,
    ReLU.__name__,
    Sigmoid.__name__,
    Softmax.__name__,
    Tanh.__name__,
    MultiHeadAttention.__name__,
    TransformerBlock.__name__,
    bce.__name__,
    cce.__name__,
    mse.__name__,
    sse.__name__,
    SGD.__name__,
    WeightInitializer.__name__,
]
