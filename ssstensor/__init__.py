"""
ssstensor: eigenpairs of sparse super-symmetric tensors

This package contains:
- multiplicity.py: multinomial scaling of symmetric index tuples
- tensor.py: sparse super-symmetric tensor store (SymmetricTensor)
- contraction.py: A x^{k-1} and A x^{k-2} contractions, sparse and dense
- solvers.py: SSHOPM, dynamical system solver, HOSVD seeding
- linalg.py: matrix eigen/singular value routines used by the solvers
- hypergraph_io.py: uniform hypergraph edge lists
"""

from .contraction import (
    TensorOperation,
    contract,
    contract_edge,
    contract_edge_k_1,
    contract_k_1,
    contract_k_1_low_memory,
    contract_k_2,
    dense_contract_k_2,
    dense_contraction,
)
from .exceptions import (
    DimensionMismatchError,
    EmptyTensorError,
    InvalidEdgeError,
    NonConvergenceWarning,
    SSSTensorError,
)
from .hypergraph_io import edges_to_arrays, load_hypergraph_tensor, read_edge_list
from .multiplicity import multinomial, multiplicity_factor
from .solvers import (
    SolverStatus,
    dense_dynamical_system_solver,
    dynamical_system_solver,
    find_shift_for_convergence,
    hosvd,
    sshopm,
    sshopm_low_memory,
)
from .tensor import SymmetricTensor, reduce_edges, verify_edges

__version__ = '0.1.0'

__all__ = [
    'SymmetricTensor',
    'reduce_edges',
    'verify_edges',
    'multinomial',
    'multiplicity_factor',
    'TensorOperation',
    'contract',
    'contract_edge',
    'contract_edge_k_1',
    'contract_k_1',
    'contract_k_1_low_memory',
    'contract_k_2',
    'dense_contraction',
    'dense_contract_k_2',
    'SolverStatus',
    'sshopm',
    'sshopm_low_memory',
    'dynamical_system_solver',
    'dense_dynamical_system_solver',
    'find_shift_for_convergence',
    'hosvd',
    'read_edge_list',
    'load_hypergraph_tensor',
    'edges_to_arrays',
    'SSSTensorError',
    'InvalidEdgeError',
    'EmptyTensorError',
    'DimensionMismatchError',
    'NonConvergenceWarning',
]
