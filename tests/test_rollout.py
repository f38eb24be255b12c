""" This file tests the rollout pool. """
import os
import os.path
import sys

import numpy as np

# Add stomp/python to path so that imports work.
stomp_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'python'))
sys.path.append(stomp_path)

from stomp.algorithm.rollout import Rollout, RolloutPool


def test_rollout_cost():
    rollout = Rollout([3, 3], 3)
    rollout.state_costs[:] = [1.0, 2.0, 3.0]
    rollout.control_costs[0][:] = [0.5, 0.0, 0.0]
    rollout.control_costs[1][:] = [0.0, 0.0, 1.5]
    assert rollout.get_cost() == 8.0


def test_copy_from_is_in_place():
    a = Rollout([2], 2)
    b = Rollout([2], 2)
    b.noise[0][:] = [1.0, 2.0]
    b.state_costs[:] = [3.0, 4.0]
    noise_buffer = a.noise[0]
    a.copy_from(b)
    assert a.noise[0] is noise_buffer
    assert np.all(a.noise[0] == [1.0, 2.0])
    assert np.all(a.state_costs == [3.0, 4.0])
    b.noise[0][0] = 7.0
    assert a.noise[0][0] == 1.0


def test_keep_cheapest():
    pool = RolloutPool(5, [2], 2)
    for r, cost in enumerate([4.0, 1.0, 3.0, 1.0]):
        pool[r].state_costs[:] = [cost, 0.0]
        pool[r].noise[0][:] = r

    order = pool.keep_cheapest(4, 3, 2)
    # Ties keep slot order.
    assert list(order) == [1, 3, 2]
    assert [pool[r].get_cost() for r in range(2, 5)] == [1.0, 1.0, 3.0]
    assert [pool[r].noise[0][0] for r in range(2, 5)] == [1.0, 3.0, 2.0]
    assert len(pool) == 5
