""" This file tests the target trajectory cost. """
import os
import os.path
import sys

import numpy as np
import pytest

# Add stomp/python to path so that imports work.
stomp_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'python'))
sys.path.append(stomp_path)

from stomp.algorithm.cost.cost_target import CostTarget
from stomp.algorithm.cost.cost_utils import RAMP_FINAL_ONLY, RAMP_LINEAR, \
        get_ramp_multiplier


def test_cost_target():
    target = np.array([[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
    cost = CostTarget({'target_state': target, 'wp': [2.0, 1.0]})
    l = cost.eval([np.zeros(3), np.ones(3)])
    assert np.allclose(l, [1.0 + 0.5, 4.0 + 0.5, 9.0 + 0.5])
    assert np.allclose(cost.eval([target[:, 0], target[:, 1]]), 0.0)


def test_cost_target_ramp():
    cost = CostTarget({'target_state': np.zeros((4, 1)),
                       'ramp_option': RAMP_FINAL_ONLY, 'wp_final_multiplier': 3.0})
    assert np.allclose(cost.eval([np.ones(4)]), [0.0, 0.0, 0.0, 1.5])
    assert np.allclose(get_ramp_multiplier(RAMP_LINEAR, 4), [0.25, 0.5, 0.75, 1.0])
    with pytest.raises(ValueError):
        get_ramp_multiplier(-1, 4)


def test_cost_target_requires_target():
    with pytest.raises(ValueError):
        CostTarget({})
