""" Default configuration and hyperparameter values for costs. """
from stomp.algorithm.cost.cost_utils import RAMP_CONSTANT


# CostTarget
COST_TARGET = {
    'ramp_option': RAMP_CONSTANT,  # How target cost ramps over time.
    'wp_final_multiplier': 1.0,  # Weight multiplier on final time step.
    # Target trajectory, T x num_dimensions - must be set.
    'target_state': None,
    # Weights, a scalar or one per dimension.
    'wp': 1.0,
}
