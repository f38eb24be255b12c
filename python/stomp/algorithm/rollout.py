""" This file defines the rollout record and the fixed-size rollout pool. """
import logging

import numpy as np

LOGGER = logging.getLogger(__name__)


class Rollout(object):
    """
    A single noisy variant of the policy parameters and its costs.
    Per-dimension quantities are lists indexed by dimension. Parameter
    vectors have num_parameters[d] entries, cost vectors have T entries.
    """
    def __init__(self, num_parameters, T):
        self.parameters = [np.zeros(n) for n in num_parameters]
        self.noise = [np.zeros(n) for n in num_parameters]
        self.noise_projected = [np.zeros(n) for n in num_parameters]
        self.parameters_noise = [np.zeros(n) for n in num_parameters]
        self.parameters_noise_projected = [np.zeros(n) for n in num_parameters]
        self.control_costs = [np.zeros(T) for _ in num_parameters]
        self.total_costs = [np.zeros(T) for _ in num_parameters]
        self.cumulative_costs = [np.zeros(T) for _ in num_parameters]
        self.probabilities = [np.zeros(T) for _ in num_parameters]
        self.state_costs = np.zeros(T)

    def get_cost(self):
        """ Sum of the control costs of every dimension and the state costs. """
        cost = np.sum(self.state_costs)
        for control_costs in self.control_costs:
            cost += np.sum(control_costs)
        return float(cost)

    def copy_from(self, other):
        """ Overwrite this rollout with the values of other, in place. """
        for name in ('parameters', 'noise', 'noise_projected',
                     'parameters_noise', 'parameters_noise_projected',
                     'control_costs', 'total_costs', 'cumulative_costs',
                     'probabilities'):
            for dst, src in zip(getattr(self, name), getattr(other, name)):
                dst[:] = src
        self.state_costs[:] = other.state_costs


class RolloutPool(object):
    """
    Preallocated storage for max_rollouts rollouts, plus a scratch buffer
    of the same size used while selecting rollouts to reuse. Slots are
    overwritten in place, the pool never grows.
    """
    def __init__(self, max_rollouts, num_parameters, T):
        self.max_rollouts = max_rollouts
        self.rollouts = [Rollout(num_parameters, T) for _ in range(max_rollouts)]
        self._reused_rollouts = [Rollout(num_parameters, T)
                                 for _ in range(max_rollouts)]

    def __len__(self):
        return self.max_rollouts

    def __getitem__(self, r):
        return self.rollouts[r]

    def rank_by_cost(self, num_rollouts):
        """
        Indices of the first num_rollouts slots sorted by ascending cost.
        Ties keep slot order.
        """
        costs = np.array([self.rollouts[r].get_cost()
                          for r in range(num_rollouts)])
        return np.argsort(costs, kind='stable')

    def keep_cheapest(self, num_rollouts, num_reused, offset):
        """
        Move the num_reused cheapest of the first num_rollouts slots into
        slots [offset, offset + num_reused).
        Args:
            num_rollouts: Number of slots currently holding valid rollouts.
            num_reused: Number of rollouts to keep.
            offset: First destination slot.
        Returns:
            The source slot indices of the kept rollouts, cheapest first.
        """
        if offset + num_reused > self.max_rollouts:
            raise ValueError('Cannot keep %d rollouts at offset %d in a pool of %d'
                             % (num_reused, offset, self.max_rollouts))
        order = self.rank_by_cost(num_rollouts)[:num_reused]
        # Stage through the scratch buffer since sources and destinations
        # may overlap.
        for r, src in enumerate(order):
            self._reused_rollouts[r].copy_from(self.rollouts[src])
        for r in range(num_reused):
            self.rollouts[offset + r].copy_from(self._reused_rollouts[r])
        LOGGER.debug('Reusing rollouts %s', list(order))
        return order
