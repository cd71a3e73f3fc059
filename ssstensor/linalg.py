"""
Matrix routines the tensor solvers delegate to.

Top-m eigenpairs of a symmetric matrix and top-k singular triplets of a
(possibly sparse) matrix. Both use ARPACK through scipy for large inputs and
fall back to the dense LAPACK routines in numpy for small matrices and when
ARPACK cannot be used (it needs the requested count to be strictly smaller
than the matrix).
"""

from itertools import permutations

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import eigsh, svds

# Below this size dense LAPACK routines are both cheaper and more robust
DENSE_CUTOFF = 32


def top_eigenvectors(M, m, which='LM'):
    """
    Compute the m leading eigenpairs of a symmetric matrix.

    Parameters:
    -----------
    M : array (n, n) or sparse matrix
        Symmetric matrix. Symmetry is not checked: the dense path reads only
        the lower triangle.
    m : int
        Number of eigenpairs, 1 <= m <= n
    which : str
        'LM' orders by magnitude, 'LA' by algebraic value (largest first)

    Returns:
    --------
    eigenvalues : array (m,)
    eigenvectors : array (n, m)
        Column j is the eigenvector of eigenvalues[j]

    Raises scipy.sparse.linalg.ArpackNoConvergence if ARPACK does not
    converge; callers let it propagate.
    """
    n = M.shape[0]
    if M.shape != (n, n):
        raise ValueError(f"Expected a square matrix, got shape {M.shape}")
    if not 1 <= m <= n:
        raise ValueError(f"Requested {m} eigenpairs of a {n}x{n} matrix")
    if which not in ('LM', 'LA'):
        raise ValueError(f"Unknown ordering: {which}")

    if n <= DENSE_CUTOFF or m >= n - 1:
        dense = M.toarray() if sparse.issparse(M) else np.asarray(M, dtype=float)
        eigenvalues, eigenvectors = np.linalg.eigh(dense)
    else:
        eigenvalues, eigenvectors = eigsh(M, k=m, which=which)

    key = np.abs(eigenvalues) if which == 'LM' else eigenvalues
    order = np.argsort(key)[::-1][:m]
    return eigenvalues[order], eigenvectors[:, order]


def top_singular_vectors(M, k):
    """
    Compute the k leading left singular vectors and singular values.

    Parameters:
    -----------
    M : array or sparse matrix (p, q)
    k : int
        Number of singular triplets, 1 <= k <= min(p, q)

    Returns:
    --------
    U : array (p, k)
    S : array (k,)
        Singular values in descending order
    """
    p, q = M.shape
    if not 1 <= k <= min(p, q):
        raise ValueError(f"Requested {k} singular triplets of a {p}x{q} matrix")

    if min(p, q) <= DENSE_CUTOFF or k >= min(p, q) - 1:
        dense = M.toarray() if sparse.issparse(M) else np.asarray(M, dtype=float)
        U, S, _ = np.linalg.svd(dense, full_matrices=False)
        return U[:, :k], S[:k]

    U, S, _ = svds(M, k=k)
    order = np.argsort(S)[::-1]
    return U[:, order], S[order]


def permutations_of(indices):
    """Distinct orderings of an index tuple."""
    return set(permutations(tuple(indices)))
