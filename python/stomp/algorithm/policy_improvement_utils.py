""" This file defines the errors raised by policy improvement. """
from numpy.linalg import LinAlgError


class PolicyImprovementError(Exception):
    """ Base class for policy improvement failures. """


class NotInitializedError(PolicyImprovementError):
    """ An operation was called before initialize() succeeded. """


class DimensionMismatchError(PolicyImprovementError, ValueError):
    """ A supplied vector or matrix does not match the configured sizes. """


class SingularMatrixError(PolicyImprovementError, LinAlgError):
    """ A control cost or projection matrix could not be inverted. """


class UpstreamFailureError(PolicyImprovementError):
    """ The policy failed to provide a required value. """


class NoActiveRolloutsError(PolicyImprovementError):
    """ An update was requested while no rollouts are active. """
