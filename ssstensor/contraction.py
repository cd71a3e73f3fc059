"""
Contraction algebra for sparse super-symmetric tensors.

The central operation is the (k-1)-mode contraction A x^{k-1}, the tensor
analog of a matrix-vector product:

    y[i] = sum over i_2..i_k of A[i, i_2, ..., i_k] x[i_2] ... x[i_k]

Each stored edge stands for all permutations of its indices, so for every
pivot position we drop that index and weight the remaining sub-edge by the
number of its distinct orderings (its multiplicity factor). A sub-edge that
appears from several pivot positions is only counted once.

The (k-2)-mode contraction A x^{k-2} (a matrix) is also provided since the
dynamical system solver needs it. Other partial contractions are not
supported.
"""

from enum import Enum

import numpy as np
import tensorly as tl
from tensorly.tenalg import multi_mode_dot

from .exceptions import DimensionMismatchError, InvalidEdgeError
from .multiplicity import multiplicity_factor


class TensorOperation(Enum):
    """Operations on symmetric tensors and whether they are available."""

    CONTRACT_K_1 = ('contract_k_1', True)
    CONTRACT_K_1_LOW_MEMORY = ('contract_k_1_low_memory', True)
    CONTRACT_K_2 = ('contract_k_2', True)
    CONTRACT_FULL = ('contract_full', True)
    DENSE_CONTRACTION = ('dense_contraction', True)
    CONTRACT_EDGE = ('contract_edge', False)
    FIND_SHIFT_FOR_CONVERGENCE = ('find_shift_for_convergence', False)

    def __init__(self, label, implemented):
        self.label = label
        self.implemented = implemented


def require_implemented(operation):
    """Raise NotImplementedError for operations that are documented but unfinished."""
    if not operation.implemented:
        raise NotImplementedError(f"{operation.label} is not implemented")


def as_vector(x, n):
    """Return x as a float vector of length n, or raise DimensionMismatchError."""
    x = np.asarray(x, dtype=float)
    if x.ndim != 1 or x.shape[0] != n:
        raise DimensionMismatchError(
            f"Vector of shape {x.shape} does not match tensor dimension {n}")
    return x


def contract_edge_k_1(indices, weight, x):
    """
    Contract a single edge along all but one mode.

    Parameters:
    -----------
    indices : tuple of int
        Sorted, 1-based index tuple of the edge
    weight : float
        Edge weight
    x : array (n,)
        Vector to contract with

    Returns:
    --------
    contributions : list of (int, float)
        (pivot index, value) pairs, one per distinct sub-edge
    """
    visited_sub_indices = set()
    contributions = []

    for p in range(len(indices)):
        sub_edge = indices[:p] + indices[p + 1:]
        if sub_edge in visited_sub_indices:
            continue
        visited_sub_indices.add(sub_edge)

        scaling = multiplicity_factor(sub_edge)
        value = scaling * weight * np.prod(x[[i - 1 for i in sub_edge]])
        contributions.append((indices[p], value))

    return contributions


def contract_edge(indices, weight, x, modes):
    """
    Contract a single edge along an arbitrary number of modes.

    Contracting 0 < modes < k-1 modes produces a lower order symmetric
    tensor, which has no sparse representation here yet.
    """
    if not 0 < modes <= len(indices):
        raise ValueError(f"Cannot contract {modes} modes of an order {len(indices)} edge")
    require_implemented(TensorOperation.CONTRACT_EDGE)


def contract_k_1(A, x, out=None):
    """
    Contract the tensor with x along all but one mode (A x^{k-1}).

    Parameters:
    -----------
    A : SymmetricTensor
        Tensor to contract
    x : array (n,)
        Vector to contract with
    out : array (n,), optional
        Buffer to write the result into (overwritten)

    Returns:
    --------
    y : array (n,)
    """
    n = A.cubical_dimension
    x = as_vector(x, n)

    y = np.zeros(n) if out is None else out
    y[:] = 0.0

    for indices, weight in A.edges.items():
        for pivot, value in contract_edge_k_1(indices, weight, x):
            y[pivot - 1] += value

    return y


def contract_k_1_low_memory(indices, values, n, x, out=None):
    """
    A x^{k-1} computed directly from parallel edge arrays.

    Same result as contract_k_1 without building a SymmetricTensor, for edge
    sets too large for the dictionary representation. Rows are expected to be
    unique; repeated rows simply add up.

    Parameters:
    -----------
    indices : array (m, k) of int
        Sorted, 1-based index tuples, one edge per row
    values : array (m,)
        Edge weights
    n : int
        Cubical dimension
    x : array (n,)
        Vector to contract with
    out : array (n,), optional
        Buffer to write the result into (overwritten)

    Returns:
    --------
    y : array (n,)
    """
    indices = np.asarray(indices)
    values = np.asarray(values)
    x = as_vector(x, n)

    if indices.ndim != 2 or indices.shape[0] != values.shape[0]:
        raise InvalidEdgeError(
            f"Index array of shape {indices.shape} does not match {values.shape[0]} values")
    if indices.size:
        if indices.min() < 1 or indices.max() > n:
            raise InvalidEdgeError(f"Edge indices must lie in [1, {n}]")
        if np.any(np.diff(indices, axis=1) < 0):
            raise InvalidEdgeError("Edge indices must be sorted within each row")

    y = np.zeros(n) if out is None else out
    y[:] = 0.0

    for row in range(indices.shape[0]):
        edge = tuple(indices[row].tolist())
        for pivot, value in contract_edge_k_1(edge, values[row], x):
            y[pivot - 1] += value

    return y


def contract_k_2(A, x):
    """
    Contract the tensor with x along all but two modes (A x^{k-2}).

    For every distinct pair of positions in an edge, the remaining k-2
    indices are contracted against x and weighted by their multiplicity
    factor. For an order-2 tensor this is the matrix itself.

    Parameters:
    -----------
    A : SymmetricTensor
        Tensor of order k >= 2
    x : array (n,)

    Returns:
    --------
    M : array (n, n)
        Symmetric matrix
    """
    n = A.cubical_dimension
    x = as_vector(x, n)
    k = A.order
    if k < 2:
        raise ValueError("Contraction to a matrix needs a tensor of order >= 2")

    M = np.zeros((n, n))

    for indices, weight in A.edges.items():
        visited_pairs = set()
        for p in range(k):
            for q in range(p + 1, k):
                pair = (indices[p], indices[q])
                if pair in visited_pairs:
                    continue
                visited_pairs.add(pair)

                sub_edge = indices[:p] + indices[p + 1:q] + indices[q + 1:]
                value = (multiplicity_factor(sub_edge) * weight *
                         np.prod(x[[i - 1 for i in sub_edge]]))

                a, b = pair[0] - 1, pair[1] - 1
                M[a, b] += value
                if a != b:
                    M[b, a] += value

    return M


def contract(A, x, modes):
    """
    Contract the tensor with x along `modes` modes.

    Supported: k-1 modes (vector), k-2 modes (matrix) and k modes (the scalar
    A x^k). Anything else raises NotImplementedError.
    """
    k = A.order
    if modes == k - 1:
        return contract_k_1(A, x)
    if modes == k - 2 and k >= 2:
        return contract_k_2(A, x)
    if modes == k:
        x = as_vector(x, A.cubical_dimension)
        return float(x @ contract_k_1(A, x))
    if not 0 < modes <= k:
        raise ValueError(f"Cannot contract {modes} modes of an order {k} tensor")
    require_implemented(TensorOperation.CONTRACT_EDGE)


def _check_dense(A, x):
    A = np.asarray(A, dtype=float)
    if A.ndim == 0 or any(s != A.shape[0] for s in A.shape):
        raise DimensionMismatchError(f"Expected a cubical array, got shape {A.shape}")
    return A, as_vector(x, A.shape[0])


def dense_contraction(A, x):
    """
    (k-1)-mode contraction of an explicit cubical array.

    Parameters:
    -----------
    A : array (n, ..., n)
        Dense k-th order tensor
    x : array (n,)

    Returns:
    --------
    y : array (n,)
        y[i] = sum A[i, i_2, ..., i_k] x[i_2] ... x[i_k]
    """
    A, x = _check_dense(A, x)
    k = A.ndim
    if k == 1:
        return A.copy()
    y = multi_mode_dot(tl.tensor(A), [x] * (k - 1), modes=list(range(1, k)))
    return np.asarray(tl.to_numpy(y), dtype=float)


def dense_contract_k_2(A, x):
    """(k-2)-mode contraction of an explicit cubical array, giving a matrix."""
    A, x = _check_dense(A, x)
    k = A.ndim
    if k < 2:
        raise ValueError("Contraction to a matrix needs a tensor of order >= 2")
    if k == 2:
        return A.copy()
    M = multi_mode_dot(tl.tensor(A), [x] * (k - 2), modes=list(range(2, k)))
    return np.asarray(tl.to_numpy(M), dtype=float)
