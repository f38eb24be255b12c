import numpy as np
import scipy as sp
import scipy.linalg
from numpy.linalg import LinAlgError

CHECK_FINITE = True
# Matrices with a condition number above this are treated as singular.
MAX_CONDITION = 1.0 / np.finfo(np.float64).eps


def invert(A):
    """General matrix inverse. Raises LinAlgError if A is singular."""
    A = np.asarray(A, dtype=np.float64)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise LinAlgError('Expected a square matrix, got shape %s' % str(A.shape))
    cond = np.linalg.cond(A)
    if not np.isfinite(cond) or cond > MAX_CONDITION:
        raise LinAlgError('Matrix is singular to working precision')
    return sp.linalg.inv(A, check_finite=CHECK_FINITE)


def sample_covariance_factor(covar):
    """
    Factor a covariance matrix as covar = L L^T so that L.dot(randn) is
    distributed as N(0, covar). Uses Cholesky, falling back to an
    eigen-decomposition for matrices that are only positive semidefinite.
    """
    try:
        return sp.linalg.cholesky(covar, lower=True, check_finite=CHECK_FINITE)
    except LinAlgError:
        evals, evecs = sp.linalg.eigh(covar, check_finite=CHECK_FINITE)
        if np.any(evals < -1e-8 * max(1.0, np.max(np.abs(evals)))):
            raise
        return evecs * np.sqrt(np.clip(evals, 0.0, None))
