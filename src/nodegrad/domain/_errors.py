"""
Graph- and shape-related exceptions for nodegrad.

This module defines the small set of runtime errors used to signal
programming errors in graph construction, backward propagation, and tensor
shape handling. Numeric domain problems (division by zero, logarithm of a
non-positive value) are deliberately *not* represented here: they surface as
IEEE special values (``inf``, ``-inf``, ``nan``) on the computed nodes.

None of these errors is meant to be recovered from locally. They indicate a
bug in the calling code (e.g., propagating from an unseeded node) and the
framework fails fast so the problem is visible at the point of misuse.
"""


class GradientNotSetError(RuntimeError):
    """
    Raised when backward propagation starts from a node without a gradient.

    Propagation reads the receiver's own gradient as the upstream value for
    its operands. A node whose gradient was never seeded (``grad is None``)
    cannot start propagation; `Node.backward(seed)` seeds the gradient and
    is the usual entrypoint.

    Attributes
    ----------
    node_repr : str
        Short representation of the offending node.
    """

    def __init__(self, node_repr: str) -> None:
        """
        Initialize the GradientNotSetError.

        Parameters
        ----------
        node_repr : str
            Representation of the node whose gradient was missing.
        """
        super().__init__(
            f"Cannot propagate from {node_repr}: its gradient was never set. "
            "Call backward(seed) or set_grad(...) first."
        )
        self.node_repr = node_repr


class ImmutableNodeError(RuntimeError):
    """
    Raised when the forward value of a non-leaf node is overwritten.

    Interior nodes fuse forward evaluation with graph construction; their value
    is fixed when they are created. Only leaves (parameters and constants) may
    be updated in place, typically by an optimizer between training steps.
    """

    def __init__(self, op: str) -> None:
        """
        Initialize the ImmutableNodeError.

        Parameters
        ----------
        op : str
            Name of the variant whose value was about to be overwritten.
        """
        super().__init__(f"Cannot set the value of a '{op}' node; only leaves are mutable.")
        self.op = op


class TensorShapeError(ValueError):
    """
    Raised when flat tensor data does not match the requested shape.

    Attributes
    ----------
    shape : tuple[int, ...]
        Requested tensor shape.
    length : int
        Number of elements actually supplied.
    """

    def __init__(self, shape: tuple, length: int) -> None:
        super().__init__(
            "The length of the `data` param does not match the values of the "
            f"`shape` param: shape={tuple(shape)} expects "
            f"{_product(shape)} elements, got {length}."
        )
        self.shape = tuple(shape)
        self.length = int(length)


class ShapeMismatchError(ValueError):
    """
    Raised when two tensors with incompatible shapes are combined.

    Attributes
    ----------
    op : str
        Operation that was attempted (e.g., "add", "matmul").
    shape_a : tuple[int, ...]
        Shape of the left operand.
    shape_b : tuple[int, ...]
        Shape of the right operand.
    """

    def __init__(self, op: str, shape_a: tuple, shape_b: tuple) -> None:
        super().__init__(
            f"Shapes are not compatible for {op}: {tuple(shape_a)} vs {tuple(shape_b)}."
        )
        self.op = op
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


def _product(shape: tuple) -> int:
    n = 1
    for d in shape:
        n *= int(d)
    return n
