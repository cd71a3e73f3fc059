"""
Eigensolvers for super-symmetric tensors.

A Z-eigenpair (lambda, x) of an order-k tensor A satisfies

    A x^{k-1} = lambda x,    ||x|| = 1

Two iterative methods are provided:

- SSHOPM, the shifted symmetric higher-order power method
  (Kolda & Mayo, 2011). A large enough shift makes the iteration monotone.
- A dynamical system whose fixed points are tensor eigenvectors
  (Benson & Gleich, 2019):

      dx/dt = Lambda_m(A x^{k-2}) - x

  where Lambda_m(M) is the sign-aligned m-th eigenvector of the matrix M.
  It is integrated with forward Euler.

Both return (vector, eigenvalue estimate, iterations). Reaching an iteration
budget is not an error: the current iterate is returned and a
NonConvergenceWarning is issued.
"""

import warnings
from enum import Enum

import numpy as np

from .config import (
    DEFAULT_DYNAMICAL_MAX_ITER,
    DEFAULT_MAX_ITER,
    DEFAULT_STEP_SIZE,
    DEFAULT_TOL,
    DYNAMICAL_PROGRESS_FORMAT,
    SSHOPM_PROGRESS_FORMAT,
)
from .contraction import (
    TensorOperation,
    as_vector,
    contract_k_1,
    contract_k_1_low_memory,
    contract_k_2,
    dense_contract_k_2,
    require_implemented,
)
from .exceptions import DimensionMismatchError, NonConvergenceWarning
from .linalg import top_eigenvectors, top_singular_vectors


class SolverStatus(Enum):
    INITIALIZING = 'initializing'
    ITERATING = 'iterating'
    CONVERGED = 'converged'
    MAX_ITER_REACHED = 'max_iter_reached'
    CANCELLED = 'cancelled'


def print_progress(line_format):
    """Progress callback printing one formatted line per report."""
    def report(info):
        print(line_format.format(**info))
    return report


def _unit_start(x0):
    norm = np.linalg.norm(x0)
    if norm == 0:
        raise ValueError("Starting vector must be non-zero")
    return x0 / norm


def _warn_stopped(status, iterations):
    # called from the solver loop, two frames below the public entry point
    if status is SolverStatus.MAX_ITER_REACHED:
        message = f"maximum iterations reached ({iterations}) before convergence"
    else:
        message = f"solver cancelled after {iterations} iterations before convergence"
    warnings.warn(message, NonConvergenceWarning, stacklevel=4)


# ============================================================
# SSHOPM
# ============================================================

def _run_sshopm(apply, n, x0, shift, max_iter, tol, display, callback, should_stop):
    """Shared SSHOPM loop; apply(x, out) writes A x^{k-1} into out."""
    if max_iter < 1:
        raise ValueError(f"max_iter must be at least 1, got {max_iter}")
    if display and callback is None:
        callback = print_progress(SSHOPM_PROGRESS_FORMAT)

    x = _unit_start(x0)
    z = np.empty(n)
    iterations = 0
    lambda_prev = np.inf

    status = SolverStatus.ITERATING
    while status is SolverStatus.ITERATING:
        apply(x, z)
        if shift != 0:
            z += shift * x
            if shift < 0:
                z *= -1

        lambda_k = float(x @ z)
        residual = z - lambda_k * x
        residual_norm = float(np.linalg.norm(residual))

        z_norm = np.linalg.norm(z)
        if z_norm == 0:
            # shifted map sends x to zero: x is an eigenvector with eigenvalue -shift
            z[:] = x
        else:
            z /= z_norm
        iterations += 1

        if display and iterations % display == 0:
            callback({
                'step': iterations,
                'lambda': lambda_k,
                'lambda_change': abs(lambda_k - lambda_prev),
                'residual_norm': residual_norm,
            })

        if residual_norm < tol:
            status = SolverStatus.CONVERGED
        elif iterations >= max_iter:
            status = SolverStatus.MAX_ITER_REACHED
        elif should_stop is not None and should_stop():
            status = SolverStatus.CANCELLED
        else:
            lambda_prev = lambda_k
            x, z = z, x

    if status is not SolverStatus.CONVERGED:
        _warn_stopped(status, iterations)

    return z, lambda_k, iterations, status


def sshopm(A, x0, shift, max_iter=DEFAULT_MAX_ITER, tol=DEFAULT_TOL, display=0,
           callback=None, should_stop=None, full_output=False):
    """
    Shifted symmetric higher-order power method.

    Each iteration computes z = A x^{k-1} + shift * x (negated when the shift
    is negative), the eigenvalue estimate lambda = x.z, the residual
    z - lambda x, and continues from z / ||z||.

    Parameters:
    -----------
    A : SymmetricTensor
        Super-symmetric tensor
    x0 : array (n,)
        Starting vector (normalized internally)
    shift : float
        Shift; a large enough positive shift guarantees convergence to a
        local maximum, a negative one to a local minimum
    max_iter : int
        Iteration budget; NonConvergenceWarning is issued when it is used up
    tol : float
        Stop when the residual norm drops below tol
    display : int
        Report progress every `display` iterations (0 disables)
    callback : callable, optional
        Receives a dict (step, lambda, lambda_change, residual_norm) at each
        report. Defaults to printing a line.
    should_stop : callable, optional
        Polled between iterations; returning True stops the solver
    full_output : bool
        Also return the final SolverStatus

    Returns:
    --------
    z : array (n,)
        Unit-norm approximate eigenvector
    lambda_k : float
        Eigenvalue estimate of the shifted (and sign-corrected) map, i.e.
        lambda_k = sign(shift) * (lambda(A) + shift) for a non-zero shift
    iterations : int
        Number of iterations run
    """
    n = A.cubical_dimension
    x0 = as_vector(x0, n)

    def apply(x, out):
        contract_k_1(A, x, out)

    z, lambda_k, iterations, status = _run_sshopm(
        apply, n, x0, shift, max_iter, tol, display, callback, should_stop)

    if full_output:
        return z, lambda_k, iterations, status
    return z, lambda_k, iterations


def sshopm_low_memory(indices, values, n, x0, shift, max_iter=DEFAULT_MAX_ITER,
                      tol=DEFAULT_TOL, display=0, callback=None, should_stop=None,
                      full_output=False):
    """
    SSHOPM over parallel edge arrays, without building a SymmetricTensor.

    Parameters:
    -----------
    indices : array (m, k) of int
        Sorted, 1-based index tuples, one edge per row
    values : array (m,)
        Edge weights
    n : int
        Cubical dimension

    The remaining parameters and the return value are those of sshopm.
    Negative shifts negate z, as in sshopm.
    """
    x0 = as_vector(x0, n)
    indices = np.asarray(indices)
    values = np.asarray(values, dtype=float)

    def apply(x, out):
        contract_k_1_low_memory(indices, values, n, x, out)

    z, lambda_k, iterations, status = _run_sshopm(
        apply, n, x0, shift, max_iter, tol, display, callback, should_stop)

    if full_output:
        return z, lambda_k, iterations, status
    return z, lambda_k, iterations


def find_shift_for_convergence(A, use_frobenius=False):
    """
    Shift bound guaranteeing monotone convergence of SSHOPM.

    The bound scales with (order(A) - 1); with use_frobenius the Frobenius
    norm of A (A.frobenius_norm()) is used as the scale, which is cheaper
    for large tensors than the spectral quantities it bounds.

    Parameters:
    -----------
    A : SymmetricTensor
    use_frobenius : bool

    Returns:
    --------
    shift_bound : float
        Smallest shift for which the method is guaranteed to converge
    """
    require_implemented(TensorOperation.FIND_SHIFT_FOR_CONVERGENCE)


# ============================================================
# DYNAMICAL SYSTEM
# ============================================================

def _is_symmetric(A):
    # adjacent transpositions generate every axis permutation
    if A.ndim == 0 or any(s != A.shape[0] for s in A.shape):
        raise DimensionMismatchError(f"Expected a cubical array, got shape {A.shape}")
    for axis in range(A.ndim - 1):
        swap = list(range(A.ndim))
        swap[axis], swap[axis + 1] = axis + 1, axis
        if not np.allclose(A, A.transpose(swap)):
            return False
    return True


def _check_eigenvector_index(m, n):
    if not 1 <= m <= n:
        raise DimensionMismatchError(
            f"Requested eigenvector {m} of an {n}x{n} matrix")


def _integrate(contract_matrix, x0, h, tol, m, display, max_iter, eigensolver,
               callback, should_stop):
    """Forward Euler on dx/dt = Lambda_m(A x^{k-2}) - x."""
    if display and callback is None:
        callback = print_progress(DYNAMICAL_PROGRESS_FORMAT)
    if eigensolver is None:
        eigensolver = top_eigenvectors

    x = _unit_start(x0)
    step = 1
    status = SolverStatus.ITERATING

    while True:
        M = contract_matrix(x)
        _, V = eigensolver(M, m)
        v = np.asarray(V)[:, m - 1]
        # eigenvector sign is arbitrary; fix it so the flow does not oscillate
        if v[0] < 0:
            v = -v

        dxdt = v - x
        dxdt_norm = float(np.linalg.norm(dxdt))

        if dxdt_norm <= tol:
            return x, float(x @ M @ x), step, SolverStatus.CONVERGED

        x = x + h * dxdt

        if display and step % display == 0:
            z = M @ x
            lambda_k = float(x @ z)
            callback({
                'step': step,
                'dxdt_norm': dxdt_norm,
                'lambda': lambda_k,
                'residual_norm': float(np.linalg.norm(z - lambda_k * x)),
            })

        if max_iter is not None and step >= max_iter:
            status = SolverStatus.MAX_ITER_REACHED
        elif should_stop is not None and should_stop():
            status = SolverStatus.CANCELLED

        if status is not SolverStatus.ITERATING:
            _warn_stopped(status, step)
            M = contract_matrix(x)
            return x, float(x @ M @ x), step, status

        step += 1


def dynamical_system_solver(A, x0, h=DEFAULT_STEP_SIZE, tol=DEFAULT_TOL, m=1, display=0,
                            max_iter=DEFAULT_DYNAMICAL_MAX_ITER, eigensolver=None,
                            callback=None, should_stop=None, full_output=False):
    """
    Tensor eigenvector from the dynamical system dx/dt = Lambda_m(A x^{k-2}) - x.

    Parameters:
    -----------
    A : SymmetricTensor
        Super-symmetric tensor of order k >= 2
    x0 : array (n,)
        Starting point (normalized internally)
    h : float
        Forward Euler step size
    tol : float
        Stop when ||dx/dt|| <= tol
    m : int
        Which eigenvector of A x^{k-2} drives the flow (1 = leading)
    display : int
        Report progress every `display` steps (0 disables)
    max_iter : int or None
        Step cap; None runs until the tolerance is met
    eigensolver : callable, optional
        eigensolver(M, m) -> (eigenvalues, eigenvectors) with eigenvectors
        as columns in the solver's order. Defaults to top_eigenvectors;
        its failures propagate.
    callback : callable, optional
        Receives a dict (step, dxdt_norm, lambda, residual_norm) per report
    should_stop : callable, optional
        Polled between steps; returning True stops the solver
    full_output : bool
        Also return the final SolverStatus

    Returns:
    --------
    x : array (n,)
        Approximate eigenvector
    lambda_k : float
        x^T (A x^{k-2}) x
    steps : int
        Number of Euler steps evaluated
    """
    n = A.cubical_dimension
    x0 = as_vector(x0, n)
    _check_eigenvector_index(m, n)

    x, lambda_k, steps, status = _integrate(
        lambda x: contract_k_2(A, x), x0, h, tol, m, display, max_iter,
        eigensolver, callback, should_stop)

    if full_output:
        return x, lambda_k, steps, status
    return x, lambda_k, steps


def dense_dynamical_system_solver(A, x0, h=DEFAULT_STEP_SIZE, tol=DEFAULT_TOL, m=1,
                                  display=0, max_iter=DEFAULT_DYNAMICAL_MAX_ITER,
                                  eigensolver=None, callback=None, should_stop=None,
                                  full_output=False):
    """
    dynamical_system_solver for an explicit k-dimensional cubical array.

    Meant for small tensors and for checking the sparse solver. Takes and
    returns the same things as dynamical_system_solver. The array must be
    symmetric under every permutation of its axes.
    """
    A = np.asarray(A, dtype=float)
    if not _is_symmetric(A):
        raise ValueError("Dense tensor must be symmetric under axis permutations")
    n = A.shape[0]
    x0 = as_vector(x0, n)
    _check_eigenvector_index(m, n)

    x, lambda_k, steps, status = _integrate(
        lambda x: dense_contract_k_2(A, x), x0, h, tol, m, display, max_iter,
        eigensolver, callback, should_stop)

    if full_output:
        return x, lambda_k, steps, status
    return x, lambda_k, steps


# ============================================================
# HOSVD SEEDING
# ============================================================

def hosvd(A, k):
    """
    Top k left singular vectors and values of the mode-1 unfolding.

    Used to pick starting vectors for the eigensolvers.

    Parameters:
    -----------
    A : SymmetricTensor
    k : int
        Number of singular triplets

    Returns:
    --------
    U : array (n, k)
    S : array (k,)
    """
    U, S = top_singular_vectors(A.flatten(), k)
    return U, S
