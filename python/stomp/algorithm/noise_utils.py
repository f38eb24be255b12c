""" This file defines the noise generator and the noise projection. """
import numpy as np
from numpy.linalg import LinAlgError

from stomp.algorithm.policy_improvement_utils import SingularMatrixError
from stomp.utility.math_utils import invert, sample_covariance_factor


class NoiseGenerator(object):
    """
    Draws samples from N(mean, covar).
    Args:
        mean: Mean vector.
        covar: Covariance matrix, must be positive semidefinite.
        random_state: A numpy RandomState, defaults to the global one.
    """
    def __init__(self, mean, covar, random_state=None):
        self.mean = np.array(mean, dtype=np.float64)
        self.covar = np.array(covar, dtype=np.float64)
        self._factor = sample_covariance_factor(self.covar)
        self._random_state = np.random if random_state is None else random_state

    def sample(self, out=None):
        """ Draw one sample, optionally writing it into out. """
        noise = self._random_state.standard_normal(len(self.mean))
        value = self.mean + self._factor.dot(noise)
        if out is None:
            return value
        out[:] = value
        return out


class ProjectionTransform(object):
    """
    Linear map from parameter-space noise into a normalised space.

    The projection matrix is the inverse control cost matrix with every
    column divided by num_parameters times its largest absolute entry, so
    that a unit-sized noise vector cannot move a single parameter by more
    than one unit regardless of the number of parameters.
    """
    def __init__(self, inv_control_cost):
        inv_control_cost = np.asarray(inv_control_cost, dtype=np.float64)
        num_parameters = inv_control_cost.shape[1]
        column_max = np.max(np.abs(inv_control_cost), axis=0)
        if np.any(column_max == 0.0):
            raise SingularMatrixError('Projection matrix has an all-zero column')
        self.matrix = inv_control_cost / (num_parameters * column_max)
        try:
            self.inv_matrix = invert(self.matrix)
        except LinAlgError as e:
            raise SingularMatrixError(
                'Projection matrix is not invertible: %s' % e) from e

    def project(self, noise):
        return self.matrix.dot(noise)

    def unproject(self, noise_projected):
        return self.inv_matrix.dot(noise_projected)
