"""
Default solver settings.

Every solver accepts these as keyword arguments; the values here are only
used when the caller does not pass one.
"""

# Stopping tolerance on the residual norm (SSHOPM) or ||dx/dt|| (dynamical)
DEFAULT_TOL = 1e-10

# SSHOPM iteration budget
DEFAULT_MAX_ITER = 1000

# Forward Euler step for the dynamical system solver
DEFAULT_STEP_SIZE = 0.5

# Dynamical system solver has no cap unless one is requested
DEFAULT_DYNAMICAL_MAX_ITER = None

# Progress lines, one every `display` iterations
SSHOPM_PROGRESS_FORMAT = (
    "step = {step:<3d} -- λ_k:{lambda: 0.12f} -- "
    "|λ_k - λ_{{k-1}}| :{lambda_change:0.12f} -- res_norm:{residual_norm:0.12f}"
)
DYNAMICAL_PROGRESS_FORMAT = (
    "step {step:5d}: norm(dxdt) = {dxdt_norm:.16f} | "
    "lambda = {lambda:.16f} | res norm = {residual_norm:.16f}"
)
