"""
Sparse Super-Symmetric Tensor Store

A super-symmetric tensor of order k and cubical dimension n is invariant under
any permutation of its indices, so only one entry per symmetry class needs to
be kept. Entries are stored as

    sorted index tuple (1-based) -> weight

and a single stored edge implicitly carries its weight on every permutation of
its indices. Weights given for the same canonical tuple are summed.
"""

import math
from itertools import combinations_with_replacement

import numpy as np
from scipy import sparse

from .exceptions import EmptyTensorError, InvalidEdgeError
from .linalg import permutations_of
from .multiplicity import multiplicity_factor


def _canonical(indices):
    indices = tuple(indices)
    try:
        key = tuple(int(i) for i in indices)
    except (TypeError, ValueError, OverflowError) as err:
        raise InvalidEdgeError(f"Edge indices must be integers: {indices}") from err
    if key != indices:
        raise InvalidEdgeError(f"Edge indices must be integers: {indices}")
    return key


def reduce_edges(edges, edge_dict=None):
    """
    Aggregate (indices, weight) pairs into a dictionary.

    Edges sharing the same index tuple have their weights added together.

    Parameters:
    -----------
    edges : iterable of (sequence of int, number)
        Sorted index tuples paired with a weight
    edge_dict : dict, optional
        Existing dictionary to merge into (modified in place)

    Returns:
    --------
    edge_dict : dict
        Mapping from index tuple to aggregated weight
    """
    if edge_dict is None:
        edge_dict = {}

    for indices, weight in edges:
        key = _canonical(indices)
        if key in edge_dict:
            edge_dict[key] += weight
        else:
            edge_dict[key] = weight

    return edge_dict


def verify_edges(edges, dimension=None, order=None):
    """
    Check that an edge list can describe a super-symmetric cubical tensor.

    Parameters:
    -----------
    edges : sequence of (sequence of int, number)
        Index tuples paired with weights
    dimension : int, optional
        Cubical dimension every index must fit into
    order : int, optional
        Required length of every index tuple. If None, the length of the
        first edge is used.

    Returns:
    --------
    order : int or None
        Order shared by all edges (None for an empty list)
    max_index : int
        Largest index seen (0 for an empty list)

    Raises InvalidEdgeError on an unsorted tuple, an index below 1, an index
    above `dimension`, an empty tuple or a tuple of the wrong length.
    """
    max_index = 0

    for indices, _ in edges:
        indices = _canonical(indices)
        if len(indices) == 0:
            raise InvalidEdgeError("Edges must have at least one index")

        if order is None:
            order = len(indices)
        elif len(indices) != order:
            raise InvalidEdgeError(
                f"Edge {indices} has order {len(indices)}, expected {order}")

        if any(a > b for a, b in zip(indices, indices[1:])):
            raise InvalidEdgeError(f"Edge indices must be sorted: {indices}")
        if indices[0] < 1:
            raise InvalidEdgeError(f"Edge indices must be positive: {indices}")
        if dimension is not None and indices[-1] > dimension:
            raise InvalidEdgeError(
                f"Edge {indices} exceeds the cubical dimension {dimension}")

        max_index = max(max_index, indices[-1])

    return order, max_index


class SymmetricTensor:
    """
    Sparse super-symmetric cubical tensor.

    Parameters:
    -----------
    edges : iterable of (sequence of int, number)
        Sorted, 1-based index tuples with their weights. All tuples must have
        the same length, which becomes the order of the tensor.
    dimension : int, optional
        Cubical dimension n. If None, the largest index in `edges` is used.

    Attributes:
    -----------
    edges : dict
        Canonical index tuple -> weight
    cubical_dimension : int
        Size of every mode
    """

    def __init__(self, edges, dimension=None):
        edges = list(edges)

        if dimension is not None:
            dimension = int(dimension)
            if dimension < 1:
                raise InvalidEdgeError(f"Cubical dimension must be positive, got {dimension}")

        _, max_index = verify_edges(edges, dimension=dimension)

        self.edges = reduce_edges(edges)
        self.cubical_dimension = max_index if dimension is None else dimension

    @classmethod
    def from_dense(cls, array, tol=0.0):
        """
        Build a sparse tensor from a dense cubical array.

        Only the entries whose indices are in non-decreasing order are read;
        the array is assumed to be symmetric.

        Parameters:
        -----------
        array : array (n, n, ..., n)
            Dense symmetric tensor
        tol : float
            Entries with absolute value <= tol are dropped
        """
        array = np.asarray(array)
        if array.ndim == 0 or any(s != array.shape[0] for s in array.shape):
            raise InvalidEdgeError(f"Expected a cubical array, got shape {array.shape}")
        n = array.shape[0]

        edges = []
        for idx in combinations_with_replacement(range(n), array.ndim):
            value = array[idx]
            if abs(value) > tol:
                edges.append((tuple(i + 1 for i in idx), float(value)))

        return cls(edges, n)

    @property
    def order(self):
        """Number of modes k."""
        for indices in self.edges:
            return len(indices)
        raise EmptyTensorError("The order of an empty tensor is undefined")

    @property
    def nnz(self):
        """Number of stored (canonical) edges."""
        return len(self.edges)

    @property
    def shape(self):
        return (self.cubical_dimension,) * self.order

    def __len__(self):
        return len(self.edges)

    def __contains__(self, indices):
        return tuple(sorted(_canonical(indices))) in self.edges

    def __getitem__(self, indices):
        # Any permutation of a stored tuple addresses the same entry
        return self.edges.get(tuple(sorted(_canonical(indices))), 0.0)

    def __repr__(self):
        order = self.order if self.edges else None
        return (f"SymmetricTensor(order={order}, dimension={self.cubical_dimension}, "
                f"nnz={self.nnz})")

    def copy(self):
        B = SymmetricTensor.__new__(SymmetricTensor)
        B.edges = dict(self.edges)
        B.cubical_dimension = self.cubical_dimension
        return B

    def add_edges(self, edges):
        """
        Add edges into the tensor, summing weights of existing entries.

        Index lists passed in are sorted in place before being checked.
        The whole batch is validated before anything is merged.

        Parameters:
        -----------
        edges : iterable of (sequence of int, number)
            Index lists (any order) paired with weights
        """
        sorted_edges = []
        for indices, weight in edges:
            if hasattr(indices, 'sort'):
                indices.sort()
            else:
                indices = sorted(indices)
            sorted_edges.append((indices, weight))

        order = self.order if self.edges else None
        verify_edges(sorted_edges, dimension=self.cubical_dimension, order=order)

        reduce_edges(sorted_edges, self.edges)

    def to_dense(self):
        """
        Dense representation of the tensor.

        Every permutation of a stored edge receives the edge weight (no
        scaling).

        Returns:
        --------
        B : array (n, n, ..., n)
            k-dimensional cubical array
        """
        B = np.zeros(self.shape)

        for indices, weight in self.edges.items():
            for p in permutations_of(indices):
                B[tuple(i - 1 for i in p)] = weight

        return B

    def flatten(self):
        """
        Mode-1 unfolding of the tensor.

        Row i holds every entry whose first index is i; the remaining k-1
        indices are flattened in row-major order, which matches
        tensorly.unfold(self.to_dense(), 0).

        Returns:
        --------
        unfolded : scipy.sparse.csr_matrix (n, n**(k-1))
        """
        k = self.order
        n = self.cubical_dimension

        rows, cols, vals = [], [], []
        for indices, weight in self.edges.items():
            for p in permutations_of(indices):
                column = 0
                for i in p[1:]:
                    column = column * n + (i - 1)
                rows.append(p[0] - 1)
                cols.append(column)
                vals.append(weight)

        return sparse.csr_matrix((np.asarray(vals, dtype=float), (rows, cols)),
                                 shape=(n, n ** (k - 1)))

    def to_arrays(self):
        """
        Edge data as parallel arrays for the low-memory routines.

        Returns:
        --------
        indices : array (nnz, k) of int
        values : array (nnz,)
        """
        indices = np.array(list(self.edges.keys()), dtype=np.int64).reshape(self.nnz, self.order)
        values = np.array(list(self.edges.values()), dtype=float)
        return indices, values

    def frobenius_norm(self):
        """Frobenius norm of the full (dense) tensor, computed sparsely."""
        total = 0.0
        for indices, weight in self.edges.items():
            total += multiplicity_factor(indices) * weight ** 2
        return math.sqrt(total)
