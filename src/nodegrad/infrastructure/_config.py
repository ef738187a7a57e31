"""
Configuration objects for nodegrad.

- `GradientMode` selects how a backward pass combines gradient contributions
  arriving at a node from several parents.
- `TransformerConfig` groups the hyperparameters shared by the attention and
  transformer-block layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GradientMode(str, Enum):
    """
    Backward-pass semantics.

    ACCUMULATE
        Contributions over all paths are summed; a node's gradient is the true
        partial derivative of the root with respect to it. This is the
        default.
    OVERWRITE
        Nodes are visited depth-first (first operand before second, children
        written before either is descended) and each write replaces the
        previous one, so the last visited parent determines a shared node's
        gradient. Matches the historical behaviour of the engine.
    """

    ACCUMULATE = "accumulate"
    OVERWRITE = "overwrite"

    @classmethod
    def resolve(cls, mode: "GradientMode | str | None") -> "GradientMode":
        """Normalize None/str/enum input to a `GradientMode`."""
        if mode is None:
            return cls.ACCUMULATE
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).lower())
        except ValueError as e:
            raise ValueError(
                f"Unsupported gradient mode: {mode!r}. "
                f"Available: {', '.join(m.value for m in cls)}"
            ) from e


@dataclass(frozen=True)
class TransformerConfig:
    """
    Hyperparameters for `MultiHeadAttention` and `TransformerBlock`.

    Attributes
    ----------
    embed_dim : int
        Channel dimension ``C`` of the ``(B, T, C)`` input.
    num_heads : int
        Number of attention heads; must divide `embed_dim`.
    seq_len : int
        Sequence length ``T`` (size of the causal mask).
    batch_size : int
        Expected batch size ``B``.
    seed : int
        Base seed for parameter initialization.
    masked : bool
        Whether attention applies a causal mask.
    ffn_multiplier : int
        Width of the feed-forward hidden layer relative to `embed_dim`.
    """

    embed_dim: int
    num_heads: int
    seq_len: int
    batch_size: int = 1
    seed: int = 0
    masked: bool = True
    ffn_multiplier: int = 4

    def __post_init__(self) -> None:
        for name in ("embed_dim", "num_heads", "seq_len", "batch_size", "ffn_multiplier"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.embed_dim % self.num_heads != 0:
            raise ValueError(
                f"embed_dim ({self.embed_dim}) must be divisible by "
                f"num_heads ({self.num_heads})"
            )

    @property
    def head_dim(self) -> int:
        return self.embed_dim // self.num_heads
