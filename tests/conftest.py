"""Shared tensors for the ssstensor tests."""

import numpy as np
import pytest

from ssstensor import SymmetricTensor


# Symmetric positive definite, eigenvalues approx 1.27, 3.0, 4.73
SPD_MATRIX = np.array([
    [2.0, 1.0, 0.0],
    [1.0, 3.0, 1.0],
    [0.0, 1.0, 4.0],
])


def random_symmetric_tensor(order, n, n_edges, seed=0):
    """Random sparse symmetric tensor with normally distributed weights."""
    rng = np.random.default_rng(seed)
    edges = []
    for _ in range(n_edges):
        indices = tuple(sorted(rng.integers(1, n + 1, size=order).tolist()))
        edges.append((indices, float(rng.normal())))
    return SymmetricTensor(edges, n)


@pytest.fixture
def matrix_tensor():
    """Order-2 tensor holding SPD_MATRIX, and the matrix itself."""
    n = SPD_MATRIX.shape[0]
    edges = [((i + 1, j + 1), SPD_MATRIX[i, j])
             for i in range(n) for j in range(i, n) if SPD_MATRIX[i, j] != 0]
    return SymmetricTensor(edges, n), SPD_MATRIX


@pytest.fixture
def diagonal_tensor():
    """Order-3 tensor with A[1,1,1] = 3 and A[2,2,2] = 1."""
    return SymmetricTensor([((1, 1, 1), 3.0), ((2, 2, 2), 1.0)], 2)


@pytest.fixture
def small_tensor():
    """Order-3, dimension-3 tensor with a repeated-index edge."""
    return SymmetricTensor([((1, 1, 2), 2.0), ((1, 2, 3), 1.0)], 3)
