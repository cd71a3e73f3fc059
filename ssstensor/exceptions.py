"""Exceptions and warnings raised by ssstensor."""


class SSSTensorError(Exception):
    """Base class for ssstensor errors."""


class InvalidEdgeError(SSSTensorError, ValueError):
    """
    Raised when an edge list cannot describe a super-symmetric tensor.

    Covers unsorted index tuples, non-positive indices, indices beyond the
    cubical dimension and edges whose order differs from the rest.
    """


class EmptyTensorError(InvalidEdgeError):
    """Raised when a property needs at least one stored edge."""


class DimensionMismatchError(SSSTensorError, ValueError):
    """Raised when a vector or eigenvector request does not fit the tensor."""


class NonConvergenceWarning(RuntimeWarning):
    """Issued when a solver stops before reaching its tolerance."""
