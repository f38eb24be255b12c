""" This file defines the target trajectory cost. """
import copy

import numpy as np

from stomp.algorithm.cost.config import COST_TARGET
from stomp.algorithm.cost.cost import Cost
from stomp.algorithm.cost.cost_utils import get_ramp_multiplier
from stomp.utility.general_utils import extract_dimension


class CostTarget(Cost):
    """ Computes weighted squared distance to a fixed target trajectory. """
    def __init__(self, hyperparams):
        config = copy.deepcopy(COST_TARGET)
        config.update(hyperparams)
        Cost.__init__(self, config)
        if config['target_state'] is None:
            raise ValueError('CostTarget requires a target_state')
        self.target = np.asarray(config['target_state'], dtype=np.float64)
        if self.target.ndim != 2:
            raise ValueError('target_state must be T x num_dimensions, got '
                             'shape %s' % str(self.target.shape))

    def eval(self, parameters):
        """
        Evaluate cost function on a set of parameters.
        Args:
            parameters: List of per-dimension parameter vectors.
        """
        T, dD = self.target.shape
        if len(parameters) != dD:
            raise ValueError('Expected %d dimensions, got %d'
                             % (dD, len(parameters)))
        wpm = get_ramp_multiplier(
            self._hyperparams['ramp_option'], T,
            wp_final_multiplier=self._hyperparams['wp_final_multiplier']
        )

        l = np.zeros(T)
        for d in range(dD):
            wp = extract_dimension(self._hyperparams['wp'], d)
            dist = np.asarray(parameters[d]) - self.target[:, d]
            l += 0.5 * wp * wpm * dist ** 2
        return l
