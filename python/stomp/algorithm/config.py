""" Default configuration and hyperparameter values for algorithms. """


# PolicyImprovement
POLICY_IMPROVEMENT = {
    # Soft-max sharpness applied to the normalised cost range when computing
    # rollout probabilities.
    'temperature': 10.0,
    # Lower bound on max_cost - min_cost at a time step.
    'min_cost_range': 1e-8,
    # Lower bound on the sum of time step weights in the parameter update.
    'min_weight_sum': 1e-6,
    # Seed for the noise generators, None draws from the global numpy state.
    'seed': None,
}


# StompOptimizer
ALG_STOMP = {
    'iterations': 50,  # Number of policy improvement iterations.
    'min_rollouts': 10,
    'max_rollouts': 20,
    'num_rollouts_per_iteration': 5,
    # Exploration noise, a scalar or one value per dimension.
    'noise_stddev': 1.0,
    # Multiplier applied to noise_stddev after every iteration.
    'noise_decay': 0.99,
    'control_cost_weight': 0.0,
    # Use cost-to-go rather than the instantaneous cost of each time step.
    'use_cumulative_costs': True,
    # Hyperparameters passed on to PolicyImprovement.
    'policy_improvement': {},
}
