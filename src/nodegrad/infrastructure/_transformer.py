"""
Transformer block.

    r1  = attention(x) + x
    out = lin2(activation(lin1(r1))) + r1

with ``lin1: C -> ffn_multiplier * C`` and ``lin2: ffn_multiplier * C -> C``.
Input and output are ``(B, T, C)``. There is no layer normalization or
dropout.
"""

from __future__ import annotations

import logging

from ..domain._errors import ShapeMismatchError
from ._activations import ReLU
from ._attention import MultiHeadAttention
from ._config import TransformerConfig
from ._linear import Linear
from ._module import Module
from .tensor._tensor import Tensor

logger = logging.getLogger(__name__)


class TransformerBlock(Module):
    """
    Self-attention followed by a position-wise feed-forward network, each
    wrapped in a residual connection.

    Parameters
    ----------
    config : TransformerConfig
        Layer sizes, masking and seed. Both feed-forward projections are
        seeded with ``config.seed``.
    """

    def __init__(self, config: TransformerConfig) -> None:
        super().__init__()
        self.config = config
        hidden = config.ffn_multiplier * config.embed_dim

        self.attention = MultiHeadAttention.from_config(config)
        self.lin1 = Linear(config.embed_dim, hidden, seed=config.seed)
        self.activation = ReLU()
        self.lin2 = Linear(hidden, config.embed_dim, seed=config.seed)
        logger.debug("TransformerBlock(%s)", config)

    def forward(self, x: Tensor) -> Tensor:
        if x.ndim != 3 or x.shape[-1] != self.config.embed_dim:
            raise ShapeMismatchError(
                "transformer_block",
                x.shape,
                (self.config.batch_size, self.config.seq_len, self.config.embed_dim),
            )
        r1 = self.attention(x) + x
        return self.lin2(self.activation(self.lin1(r1))) + r1
