""" Default configuration and hyperparameter values for policies. """


# CovariantMovementPrimitive
COVARIANT_MOVEMENT_PRIMITIVE = {
    'T': 100,  # Number of time steps, one parameter per step.
    'num_dimensions': 1,  # Number of joints.
    'dt': 1.0,  # Time between two consecutive steps.
    # Fixed positions before the first and after the last step. Scalars
    # apply to every dimension.
    'start': 0.0,
    'goal': 0.0,
    # Initial parameters, T x num_dimensions. None interpolates linearly
    # between start and goal.
    'init_parameters': None,
}
