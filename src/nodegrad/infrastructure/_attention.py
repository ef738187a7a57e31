"""
Multi-head scaled dot-product self-attention.

For an input ``x`` of shape ``(B, T, C)`` and ``H`` heads with
``d_k = C / H``, each head ``h`` computes

    Q = x W_q[h] + b_q[h]        (B, T, d_k)
    K = x W_k[h] + b_k[h]
    V = x W_v[h] + b_v[h]
    A = softmax(Q K^T / sqrt(d_k), mask)    (B, T, T)
    head_h = A V                            (B, T, d_k)

and the heads are concatenated on the last dimension, giving ``(B, T, C)``.

Masking
-------
With ``masked=True`` a lower-triangular 0/1 matrix of shape
``(seq_len, seq_len)`` multiplies the exponentiated scores inside the
softmax, so position ``t`` only attends to positions ``<= t``. Inputs shorter
than `seq_len` use the top-left corner of the mask.
"""

from __future__ import annotations

import logging
import math
from typing import List

import numpy as np

from ..domain._errors import ShapeMismatchError
from ._config import TransformerConfig
from ._linear import Linear
from ._module import Module
from .tensor._tensor import Tensor

logger = logging.getLogger(__name__)


class MultiHeadAttention(Module):
    """
    Multi-head self-attention layer.

    Parameters
    ----------
    embed_dim : int
        Channel dimension ``C``.
    num_heads : int
        Number of heads; must divide `embed_dim`.
    seq_len : int
        Maximum sequence length ``T`` (size of the causal mask).
    masked : bool, optional
        Apply a causal mask. Defaults to True.
    seed : int, optional
        Base seed; head ``h`` seeds its query/key/value projections with
        ``seed + 3h``, ``seed + 3h + 1`` and ``seed + 3h + 2``.

    Raises
    ------
    ValueError
        If the sizes are not positive or `embed_dim` is not divisible by
        `num_heads`.
    """

    def __init__(
        self,
        embed_dim: int,
        num_heads: int,
        seq_len: int,
        masked: bool = True,
        seed: int = 0,
    ) -> None:
        super().__init__()
        config = TransformerConfig(
            embed_dim=embed_dim, num_heads=num_heads, seq_len=seq_len, seed=seed, masked=masked
        )
        self.embed_dim = config.embed_dim
        self.num_heads = config.num_heads
        self.seq_len = config.seq_len
        self.head_dim = config.head_dim
        self.masked = bool(masked)

        self.queries: List[Linear] = []
        self.keys: List[Linear] = []
        self.values: List[Linear] = []
        for h in range(self.num_heads):
            base = seed + 3 * h
            q = Linear(self.embed_dim, self.head_dim, seed=base)
            k = Linear(self.embed_dim, self.head_dim, seed=base + 1)
            v = Linear(self.embed_dim, self.head_dim, seed=base + 2)
            self.register_module(f"query_{h}", q)
            self.register_module(f"key_{h}", k)
            self.register_module(f"value_{h}", v)
            self.queries.append(q)
            self.keys.append(k)
            self.values.append(v)

        self.mask = Tensor(np.tril(np.ones((self.seq_len, self.seq_len)))) if masked else None
        logger.debug(
            "MultiHeadAttention(C=%d, heads=%d, T=%d, masked=%s)",
            self.embed_dim,
            self.num_heads,
            self.seq_len,
            self.masked,
        )

    @classmethod
    def from_config(cls, config: TransformerConfig) -> "MultiHeadAttention":
        return cls(
            config.embed_dim,
            config.num_heads,
            config.seq_len,
            masked=config.masked,
            seed=config.seed,
        )

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply self-attention to a ``(B, T, C)`` tensor.

        Raises
        ------
        ShapeMismatchError
            If `x` is not 3-D, its channel size differs from `embed_dim`, or
            ``T`` exceeds `seq_len`.
        """
        if x.ndim != 3 or x.shape[-1] != self.embed_dim or x.shape[1] > self.seq_len:
            raise ShapeMismatchError(
                "attention", x.shape, (x.shape[0] if x.ndim else 1, self.seq_len, self.embed_dim)
            )
        t = x.shape[1]
        mask = self.mask[:t, :t] if self.mask is not None else None
        scale = 1.0 / math.sqrt(self.head_dim)

        heads = []
        for q_proj, k_proj, v_proj in zip(self.queries, self.keys, self.values):
            q = q_proj(x)
            k = k_proj(x)
            v = v_proj(x)
            scores = (q @ k.transpose()) * scale
            heads.append(scores.softmax(-1, mask) @ v)
        return Tensor.concat(heads, dim=-1)
