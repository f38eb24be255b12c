""" This file defines the loop that optimizes a policy with PI2. """
import copy

import numpy as np

from stomp.algorithm.config import ALG_STOMP
from stomp.algorithm.policy_improvement import PolicyImprovement
from stomp.algorithm.policy_improvement_utils import DimensionMismatchError
from stomp.utility import ColorLogger

LOGGER = ColorLogger(__name__)


class StompOptimizer(object):
    """
    Repeatedly samples rollouts around the policy, evaluates them with a
    cost, and applies the policy improvement update.
    Args:
        hyperparams: Overrides of ALG_STOMP.
        policy: A Policy object, updated in place.
        cost: A Cost object scoring projected noisy parameters.
    """
    def __init__(self, hyperparams, policy, cost):
        config = copy.deepcopy(ALG_STOMP)
        config.update(hyperparams)
        self._hyperparams = config
        self.policy = policy
        self.cost = cost
        self.T = policy.get_num_time_steps()
        self.dD = policy.get_num_dimensions()

        noise_stddev = np.asarray(config['noise_stddev'], dtype=np.float64)
        if noise_stddev.ndim == 0:
            noise_stddev = noise_stddev * np.ones(self.dD)
        if noise_stddev.shape != (self.dD,):
            raise DimensionMismatchError(
                'Expected %d noise standard deviations, got %s'
                % (self.dD, noise_stddev.shape))
        self.noise_stddev = noise_stddev

        self.policy_improvement = PolicyImprovement(config['policy_improvement'])
        self.policy_improvement.initialize(
            self.T, config['min_rollouts'], config['max_rollouts'],
            config['num_rollouts_per_iteration'], policy,
            use_cumulative_costs=config['use_cumulative_costs'])

        self.iteration_count = 0
        self.costs = []
        self.best_cost = np.inf
        self.best_parameters = policy.get_parameters()

    def iteration(self):
        """
        Run one iteration of policy improvement.
        Returns:
            Total cost of the noiseless policy after the update.
        """
        pi = self.policy_improvement
        noise_stddev = (self.noise_stddev *
                        self._hyperparams['noise_decay'] ** self.iteration_count)
        pi.generate_rollouts(noise_stddev)
        pi.compute_projected_noise()

        state_costs = np.array([self.cost.eval(rollout)
                                for rollout in pi.get_projected_rollouts()])
        pi.set_rollout_costs(state_costs, self._hyperparams['control_cost_weight'])
        updates = pi.improve_policy()
        self.policy.update_parameters(updates)

        cost = self.evaluate()
        self.costs.append(cost)
        if cost < self.best_cost:
            self.best_cost = cost
            self.best_parameters = self.policy.get_parameters()
        LOGGER.info('Iteration %d: cost %f (best %f)', self.iteration_count,
                    cost, self.best_cost)
        self.iteration_count += 1
        return cost

    def evaluate(self):
        """ Total state and control cost of the current noiseless policy. """
        parameters = self.policy.get_parameters()
        noise = [np.zeros_like(p) for p in parameters]
        state_cost = np.sum(self.cost.eval(parameters))
        control_costs = self.policy.compute_control_costs(
            parameters, noise, self._hyperparams['control_cost_weight'])
        return float(state_cost + sum(np.sum(c) for c in control_costs))

    def run(self, iterations=None):
        """
        Run the optimization.
        Args:
            iterations: Number of iterations, defaults to the hyperparameter.
        Returns:
            The best parameters found.
        """
        if iterations is None:
            iterations = self._hyperparams['iterations']
        for _ in range(iterations):
            self.iteration()
        return self.best_parameters
