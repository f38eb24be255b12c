""" This file defines the covariant movement primitive policy. """
import copy
import logging

import numpy as np

from stomp.algorithm.policy.config import COVARIANT_MOVEMENT_PRIMITIVE
from stomp.algorithm.policy.policy import Policy
from stomp.utility.general_utils import check_shape, extract_dimension

LOGGER = logging.getLogger(__name__)


class CovariantMovementPrimitive(Policy):
    """
    Trajectory with one free position per time step and dimension, held
    between fixed start and goal positions. The control cost is the sum of
    squared finite-difference accelerations:
        R = A^T A, where (A theta)[t] = (theta[t-1] - 2 theta[t] + theta[t+1]) / dt^2
    with the start and goal positions standing in outside [0, T).
    """
    def __init__(self, hyperparams):
        config = copy.deepcopy(COVARIANT_MOVEMENT_PRIMITIVE)
        config.update(hyperparams)
        self._hyperparams = config
        self.dD = config['num_dimensions']
        self.start = np.array([extract_dimension(config['start'], d)
                               for d in range(self.dD)], dtype=np.float64)
        self.goal = np.array([extract_dimension(config['goal'], d)
                              for d in range(self.dD)], dtype=np.float64)
        self.set_num_time_steps(config['T'])
        if config['init_parameters'] is not None:
            init = np.asarray(config['init_parameters'], dtype=np.float64)
            check_shape(init, (self.T, self.dD), name='init_parameters')
            self.set_parameters([init[:, d] for d in range(self.dD)])

    def set_num_time_steps(self, T):
        """
        Resize the trajectory. The parameters are reset to a straight line
        only when the number of time steps changes.
        """
        if T < 1:
            raise ValueError('Need at least one time step, got %d' % T)
        if getattr(self, 'T', None) == T:
            return
        self.T = T
        LOGGER.debug('Resizing movement primitive to %d time steps.', T)
        dt2 = self._hyperparams['dt'] ** 2
        self.diff_matrix = (np.diag(-2.0 * np.ones(T)) +
                            np.diag(np.ones(T - 1), 1) +
                            np.diag(np.ones(T - 1), -1)) / dt2
        self.control_cost = self.diff_matrix.T.dot(self.diff_matrix)
        # Contribution of the fixed endpoints to the first and last rows.
        self.boundary = np.zeros((self.dD, T))
        self.boundary[:, 0] += self.start / dt2
        self.boundary[:, -1] += self.goal / dt2

        alpha = np.arange(1, T + 1) / float(T + 1)
        self.parameters = [self.start[d] + alpha * (self.goal[d] - self.start[d])
                           for d in range(self.dD)]

    def get_num_time_steps(self):
        return self.T

    def get_num_dimensions(self):
        return self.dD

    def get_num_parameters(self):
        return [self.T] * self.dD

    def get_control_costs(self):
        return [self.control_cost.copy() for _ in range(self.dD)]

    def get_parameters(self):
        return [p.copy() for p in self.parameters]

    def set_parameters(self, parameters):
        if len(parameters) != self.dD:
            raise ValueError('Expected parameters for %d dimensions, got %d'
                             % (self.dD, len(parameters)))
        new_parameters = []
        for d, p in enumerate(parameters):
            p = np.array(p, dtype=np.float64)
            check_shape(p, (self.T,), name='parameters[%d]' % d)
            new_parameters.append(p)
        self.parameters = new_parameters

    def get_accelerations(self, parameters):
        """ Finite-difference accelerations of each dimension. """
        return [self.diff_matrix.dot(parameters[d]) + self.boundary[d]
                for d in range(self.dD)]

    def compute_control_costs(self, parameters, noise, weight):
        acc = self.get_accelerations([parameters[d] + noise[d]
                                      for d in range(self.dD)])
        return [weight * acc[d] ** 2 for d in range(self.dD)]

    def get_trajectory(self):
        """ T+2 x dD array of positions, including start and goal. """
        traj = np.zeros((self.T + 2, self.dD))
        traj[0] = self.start
        traj[-1] = self.goal
        traj[1:-1] = np.array(self.parameters).T
        return traj
