""" This file tests the PI2 optimization loop. """
import os
import os.path
import sys

import numpy as np

# Add stomp/python to path so that imports work.
stomp_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'python'))
sys.path.append(stomp_path)

from stomp.algorithm.cost.cost_target import CostTarget
from stomp.algorithm.policy.covariant_movement_primitive import CovariantMovementPrimitive
from stomp.algorithm.stomp_optimizer import StompOptimizer


def test_optimizer_reduces_cost():
    T = 10
    target = np.sin(np.linspace(0.0, np.pi, T))[:, np.newaxis]
    policy = CovariantMovementPrimitive({'T': T})
    cost = CostTarget({'target_state': target})
    hyperparams = {
        'iterations': 30,
        'min_rollouts': 5,
        'max_rollouts': 10,
        'num_rollouts_per_iteration': 5,
        'noise_stddev': 0.2,
        'noise_decay': 0.95,
        'policy_improvement': {'seed': 0},
    }
    optimizer = StompOptimizer(hyperparams, policy, cost)
    initial_cost = optimizer.evaluate()

    best = optimizer.run()
    assert len(optimizer.costs) == 30
    assert optimizer.iteration_count == 30
    assert optimizer.best_cost < initial_cost
    assert optimizer.best_cost == min(optimizer.costs)
    assert len(best) == 1
    assert best[0].shape == (T,)
    assert optimizer.policy_improvement.min_rollouts <= \
            optimizer.policy_improvement.num_rollouts <= 10
