""" This file defines the base cost class. """
import abc


class Cost(metaclass=abc.ABCMeta):
    """ Cost superclass. """
    def __init__(self, hyperparams):
        self._hyperparams = hyperparams

    @abc.abstractmethod
    def eval(self, parameters):
        """
        Evaluate the state cost of a candidate trajectory.
        Args:
            parameters: List of per-dimension parameter vectors.
        Returns:
            A length T vector of costs, one per time step.
        """
        raise NotImplementedError("Must be implemented in subclass.")
