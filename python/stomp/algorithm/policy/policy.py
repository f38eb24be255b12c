""" This file defines the base class for the policy. """
import abc


class Policy(metaclass=abc.ABCMeta):
    """
    A parameterized trajectory whose parameters are optimized by policy
    improvement. Parameters are stored as one vector per dimension.
    """
    @abc.abstractmethod
    def set_num_time_steps(self, T):
        raise NotImplementedError("Must be implemented in subclass.")

    @abc.abstractmethod
    def get_num_time_steps(self):
        raise NotImplementedError("Must be implemented in subclass.")

    @abc.abstractmethod
    def get_num_dimensions(self):
        raise NotImplementedError("Must be implemented in subclass.")

    @abc.abstractmethod
    def get_num_parameters(self):
        """ Returns a list with the number of parameters of each dimension. """
        raise NotImplementedError("Must be implemented in subclass.")

    @abc.abstractmethod
    def get_control_costs(self):
        """
        Returns a list with one symmetric positive definite matrix per
        dimension, defining the quadratic control cost over its parameters.
        """
        raise NotImplementedError("Must be implemented in subclass.")

    @abc.abstractmethod
    def get_parameters(self):
        raise NotImplementedError("Must be implemented in subclass.")

    @abc.abstractmethod
    def set_parameters(self, parameters):
        raise NotImplementedError("Must be implemented in subclass.")

    def update_parameters(self, updates):
        """
        Add a per-dimension update to the current parameters.
        Args:
            updates: A list of update vectors, one per dimension.
        """
        parameters = self.get_parameters()
        self.set_parameters([p + u for p, u in zip(parameters, updates)])

    @abc.abstractmethod
    def compute_control_costs(self, parameters, noise, weight):
        """
        Args:
            parameters: List of parameter vectors, one per dimension.
            noise: List of noise vectors added to the parameters.
            weight: Scalar multiplier on the control cost.
        Returns:
            A list with one length T vector of control costs per dimension.
        """
        raise NotImplementedError("Must be implemented in subclass.")
