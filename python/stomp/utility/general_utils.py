""" This file defines general utility functions and classes. """
import logging
import os
import time
import traceback as tb

import numpy as np

from stomp.utility import color_string

LOGGER = logging.getLogger(__name__)


class Timer(object):
    """ Context manager that logs the time spent inside its block. """
    def __init__(self, message):
        self.message = message

    def __enter__(self):
        self.time_start = time.time()

    def __exit__(self, exc_type, exc_val, exc_tb):
        new_time = time.time() - self.time_start
        fname, _, method, _ = tb.extract_stack()[-2]  # Get caller
        _, fname = os.path.split(fname)
        id_str = '%s:%s' % (fname, method)
        LOGGER.debug('TIMER:' + color_string(
            '%s: %s (Elapsed: %fs)' % (id_str, self.message, new_time),
            color='gray'))


def check_shape(value, expected_shape, name=''):
    """
    Throws a ValueError if value.shape != expected_shape.
    Args:
        value: Matrix to shape check.
        expected_shape: A tuple or list of integers.
        name: An optional name to add to the exception message.
    """
    if value.shape != tuple(expected_shape):
        raise ValueError('Shape mismatch %s: Expected %s, got %s' %
                         (name, str(expected_shape), str(value.shape)))


def extract_dimension(values, d):
    """
    Pull the value for dimension d out of a per-dimension setting. Scalars
    apply to every dimension.
    """
    if np.isscalar(values):
        return values
    return values[d]
