""" This file defines PI2 policy improvement with rollout reuse.

Rollouts are sampled around the current policy parameters with noise shaped
by the inverse control cost, scored by the caller, and combined into a
parameter update weighted by a per-time-step soft-max over their costs.
The cheapest rollouts of earlier iterations are kept and re-centred on the
new parameters.
References:
[1] E. Theodorou, J. Buchli, and S. Schaal. A generalized path integral control
    approach to reinforcement learning. JMLR, 11, 2010.
[2] M. Kalakrishnan, S. Chitta, E. Theodorou, P. Pastor, and S. Schaal. STOMP:
    Stochastic trajectory optimization for motion planning. In ICRA, 2011.
"""
import copy

import numpy as np
from numpy.linalg import LinAlgError

from stomp.algorithm.config import POLICY_IMPROVEMENT
from stomp.algorithm.noise_utils import NoiseGenerator, ProjectionTransform
from stomp.algorithm.policy_improvement_utils import DimensionMismatchError, \
        NoActiveRolloutsError, NotInitializedError, \
        SingularMatrixError, UpstreamFailureError
from stomp.algorithm.rollout import RolloutPool
from stomp.utility import ColorLogger
from stomp.utility.general_utils import Timer
from stomp.utility.math_utils import invert

LOGGER = ColorLogger(__name__)


class PolicyImprovement(object):
    """ PI2 policy improvement.
    Hyperparameters:
        temperature: Sharpness of the soft-max over normalised costs.
        min_cost_range: Lower bound on the cost range at a time step.
        min_weight_sum: Lower bound on the sum of time step weights.
        seed: Seed for noise sampling.
    """
    def __init__(self, hyperparams=None):
        config = copy.deepcopy(POLICY_IMPROVEMENT)
        config.update(hyperparams or {})
        self._hyperparams = config
        self._initialized = False
        self.policy = None

    def initialize(self, num_time_steps, min_rollouts, max_rollouts,
                   num_rollouts_per_iteration, policy,
                   use_cumulative_costs=True):
        """
        Query the policy, set up noise generators and projections and
        allocate the rollout pool.
        Args:
            num_time_steps: Number of time steps T.
            min_rollouts: Minimum number of rollouts used in an update.
            max_rollouts: Capacity of the rollout pool.
            num_rollouts_per_iteration: Rollouts sampled per iteration.
            policy: A Policy object.
            use_cumulative_costs: Whether to weight rollouts by cost-to-go.
        Returns:
            True. Raises a PolicyImprovementError subclass on failure, in
            which case the object stays uninitialized.
        """
        self._initialized = False
        if not 1 <= num_rollouts_per_iteration <= max_rollouts:
            raise DimensionMismatchError(
                'Need 1 <= num_rollouts_per_iteration (%d) <= max_rollouts (%d)'
                % (num_rollouts_per_iteration, max_rollouts))
        if min_rollouts > max_rollouts:
            raise DimensionMismatchError(
                'min_rollouts (%d) exceeds max_rollouts (%d)'
                % (min_rollouts, max_rollouts))

        self.policy = policy
        self._query_policy('set_num_time_steps', num_time_steps, allow_none=True)
        control_costs = self._query_policy('get_control_costs')
        num_dimensions = self._query_policy('get_num_dimensions')
        num_parameters = list(self._query_policy('get_num_parameters'))
        parameters = self._query_policy('get_parameters')

        if len(num_parameters) != num_dimensions or \
                len(control_costs) != num_dimensions:
            raise UpstreamFailureError(
                'Policy reports %d dimensions but %d parameter counts and '
                '%d control cost matrices' % (num_dimensions,
                len(num_parameters), len(control_costs)))
        for d in range(num_dimensions):
            # The update rule pairs parameter t with time step t.
            if num_parameters[d] != num_time_steps:
                raise DimensionMismatchError(
                    'Dimension %d has %d parameters, expected one per time '
                    'step (%d)' % (d, num_parameters[d], num_time_steps))
            if np.shape(control_costs[d]) != (num_parameters[d], num_parameters[d]):
                raise DimensionMismatchError(
                    'Control cost of dimension %d has shape %s, expected %s'
                    % (d, np.shape(control_costs[d]),
                       (num_parameters[d], num_parameters[d])))

        seed = self._hyperparams['seed']
        random_state = None if seed is None else np.random.RandomState(seed)
        control_costs = [np.array(c, dtype=np.float64) for c in control_costs]
        inv_control_costs, noise_generators, projections = [], [], []
        for d in range(num_dimensions):
            try:
                inv_control_costs.append(invert(control_costs[d]))
            except LinAlgError as e:
                raise SingularMatrixError(
                    'Control cost of dimension %d is not invertible: %s'
                    % (d, e)) from e
            noise_generators.append(NoiseGenerator(
                np.zeros(num_parameters[d]), inv_control_costs[d],
                random_state=random_state))
            projections.append(ProjectionTransform(inv_control_costs[d]))

        self.T = num_time_steps
        self.dD = num_dimensions
        self.num_parameters = num_parameters
        self.min_rollouts = min_rollouts
        self.max_rollouts = max_rollouts
        self.num_rollouts_per_iteration = num_rollouts_per_iteration
        self.use_cumulative_costs = use_cumulative_costs
        self.control_costs = control_costs
        self.inv_control_costs = inv_control_costs
        self.projections = projections
        self._noise_generators = noise_generators
        self.parameters = [np.array(p, dtype=np.float64) for p in parameters]

        self.num_rollouts = 0
        self.num_rollouts_gen = 0
        self.control_cost_weight = 0.0
        self.pool = RolloutPool(max_rollouts, num_parameters, num_time_steps)
        self._tmp_noise = [np.zeros(n) for n in num_parameters]
        self.time_step_weights = [np.zeros(num_time_steps)
                                  for _ in range(num_dimensions)]
        self.parameter_updates = [np.zeros(num_time_steps)
                                  for _ in range(num_dimensions)]

        self._initialized = True
        LOGGER.debug('Initialized policy improvement: T=%d, %d dimensions, '
                     'rollouts min %d max %d per iteration %d', self.T,
                     self.dD, min_rollouts, max_rollouts,
                     num_rollouts_per_iteration)
        return True

    def generate_rollouts(self, noise_stddev):
        """
        Decide how many rollouts to reuse and sample the new ones.
        New rollouts occupy slots [0, num_rollouts_gen), reused ones follow.
        Args:
            noise_stddev: Noise standard deviation for each dimension.
        """
        self._check_initialized()
        noise_stddev = np.atleast_1d(np.asarray(noise_stddev, dtype=np.float64))
        if noise_stddev.shape != (self.dD,):
            raise DimensionMismatchError(
                'Expected %d noise standard deviations, got %s'
                % (self.dD, noise_stddev.shape))

        self._copy_parameters_from_policy()

        prev_num_rollouts = self.num_rollouts
        num_rollouts_reused = prev_num_rollouts
        num_rollouts_discard = 0
        num_rollouts_gen = self.num_rollouts_per_iteration
        if prev_num_rollouts + num_rollouts_gen < self.min_rollouts:
            num_rollouts_gen = self.min_rollouts - prev_num_rollouts
        if prev_num_rollouts + num_rollouts_gen > self.max_rollouts:
            num_rollouts_discard = (prev_num_rollouts + num_rollouts_gen -
                                    self.max_rollouts)
            num_rollouts_reused = prev_num_rollouts - num_rollouts_discard
        self.num_rollouts_gen = num_rollouts_gen
        self.num_rollouts = num_rollouts_reused + num_rollouts_gen
        LOGGER.debug('Rollouts: %d generated, %d reused, %d discarded',
                     num_rollouts_gen, num_rollouts_reused, num_rollouts_discard)

        if num_rollouts_reused > 0:
            self.pool.keep_cheapest(prev_num_rollouts, num_rollouts_reused,
                                    num_rollouts_gen)
            for r in range(num_rollouts_gen, self.num_rollouts):
                self._recenter_rollout(self.pool[r])

        for d in range(self.dD):
            for r in range(num_rollouts_gen):
                rollout = self.pool[r]
                self._noise_generators[d].sample(out=self._tmp_noise[d])
                rollout.noise[d][:] = noise_stddev[d] * self._tmp_noise[d]
                rollout.parameters[d][:] = self.parameters[d]
                rollout.parameters_noise[d][:] = self.parameters[d] + rollout.noise[d]
        return True

    def _recenter_rollout(self, rollout):
        """
        Move a reused rollout onto the current parameters. Its projected
        noisy parameters stay fixed, everything else is derived from them.
        """
        for d in range(self.dD):
            rollout.parameters[d][:] = self.parameters[d]
            rollout.noise_projected[d][:] = (rollout.parameters_noise_projected[d] -
                                             self.parameters[d])
            rollout.noise[d][:] = self.projections[d].unproject(
                rollout.noise_projected[d])
            rollout.parameters_noise[d][:] = self.parameters[d] + rollout.noise[d]

    def get_rollouts(self):
        """ Noisy parameters of the newly generated rollouts. """
        self._check_initialized()
        return [[p.copy() for p in self.pool[r].parameters_noise]
                for r in range(self.num_rollouts_gen)]

    def get_projected_rollouts(self):
        """ Projected noisy parameters of the newly generated rollouts. """
        self._check_initialized()
        return [[p.copy() for p in self.pool[r].parameters_noise_projected]
                for r in range(self.num_rollouts_gen)]

    def set_rollouts(self, rollouts):
        """
        Replace the noisy parameters of the newly generated rollouts and
        recompute their noise.
        Args:
            rollouts: One list of per-dimension parameter vectors per
                generated rollout.
        """
        self._check_initialized()
        if len(rollouts) != self.num_rollouts_gen:
            raise DimensionMismatchError('Expected %d rollouts, got %d'
                                         % (self.num_rollouts_gen, len(rollouts)))
        for r, params in enumerate(rollouts):
            if len(params) != self.dD:
                raise DimensionMismatchError(
                    'Rollout %d has %d dimensions, expected %d'
                    % (r, len(params), self.dD))
            for d in range(self.dD):
                if np.shape(params[d]) != (self.num_parameters[d],):
                    raise DimensionMismatchError(
                        'Rollout %d dimension %d has shape %s, expected %s'
                        % (r, d, np.shape(params[d]), (self.num_parameters[d],)))
        for r, params in enumerate(rollouts):
            rollout = self.pool[r]
            for d in range(self.dD):
                rollout.parameters_noise[d][:] = params[d]
            self.compute_noise(rollout)
        return True

    def clear_reused_rollouts(self):
        """ Forget all rollouts, the next iteration starts from scratch. """
        self._check_initialized()
        self.num_rollouts = 0

    def set_rollout_costs(self, costs, control_cost_weight):
        """
        Store state costs of the generated rollouts and compute control
        costs of all active rollouts.
        Args:
            costs: num_rollouts_gen x T matrix of state costs.
            control_cost_weight: Multiplier on the control cost.
        Returns:
            Vector with the total cost of every active rollout.
        """
        self._check_initialized()
        costs = np.asarray(costs, dtype=np.float64)
        if costs.shape != (self.num_rollouts_gen, self.T):
            raise DimensionMismatchError(
                'Expected state costs of shape %s, got %s'
                % ((self.num_rollouts_gen, self.T), costs.shape))

        self.control_cost_weight = control_cost_weight
        self.compute_rollout_control_costs()
        for r in range(self.num_rollouts_gen):
            self.pool[r].state_costs[:] = costs[r]

        rollout_costs_total = np.array([self.pool[r].get_cost()
                                        for r in range(self.num_rollouts)])
        for r in range(self.num_rollouts_gen):
            LOGGER.debug('Noisy %d, cost = %f', r, rollout_costs_total[r])
        return rollout_costs_total

    def compute_projected_noise(self, rollout=None):
        """ Project the noise of one rollout, or of every active rollout. """
        self._check_initialized()
        rollouts = ([rollout] if rollout is not None else
                    [self.pool[r] for r in range(self.num_rollouts)])
        for rollout in rollouts:
            for d in range(self.dD):
                rollout.noise_projected[d][:] = self.projections[d].project(
                    rollout.noise[d])
                rollout.parameters_noise_projected[d][:] = (
                    rollout.parameters[d] + rollout.noise_projected[d])
        return True

    def compute_noise(self, rollout):
        """ Recover the noise of a rollout from its noisy parameters. """
        self._check_initialized()
        for d in range(self.dD):
            rollout.noise[d][:] = rollout.parameters_noise[d] - rollout.parameters[d]

    def compute_rollout_control_costs(self):
        self._check_initialized()
        for r in range(self.num_rollouts):
            rollout = self.pool[r]
            control_costs = self._query_policy(
                'compute_control_costs', rollout.parameters,
                rollout.noise_projected, self.control_cost_weight)
            if len(control_costs) != self.dD:
                raise UpstreamFailureError(
                    'Policy returned control costs for %d dimensions, expected %d'
                    % (len(control_costs), self.dD))
            for d in range(self.dD):
                if np.shape(control_costs[d]) != (self.T,):
                    raise UpstreamFailureError(
                        'Control costs of dimension %d have shape %s, expected %s'
                        % (d, np.shape(control_costs[d]), (self.T,)))
                rollout.control_costs[d][:] = control_costs[d]

    def compute_rollout_cumulative_costs(self):
        self._check_initialized()
        for r in range(self.num_rollouts):
            rollout = self.pool[r]
            for d in range(self.dD):
                rollout.total_costs[d][:] = rollout.state_costs + rollout.control_costs[d]
                if self.use_cumulative_costs:
                    # Cost-to-go: sum over [t, T).
                    rollout.cumulative_costs[d][:] = \
                            np.cumsum(rollout.total_costs[d][::-1])[::-1]
                else:
                    rollout.cumulative_costs[d][:] = rollout.total_costs[d]

    def compute_rollout_probabilities(self):
        """
        Soft-max over rollouts of the cumulative cost at every dimension and
        time step. The cost range at each step is kept as its weight in the
        parameter update.
        """
        self._check_active_rollouts()
        temperature = self._hyperparams['temperature']
        rollouts = [self.pool[r] for r in range(self.num_rollouts)]
        for d in range(self.dD):
            costs = np.array([rollout.cumulative_costs[d] for rollout in rollouts])
            min_cost = np.min(costs, axis=0)
            max_cost = np.max(costs, axis=0)
            denom = max_cost - min_cost
            self.time_step_weights[d][:] = denom

            # Prevent divide by zero.
            denom = np.maximum(denom, self._hyperparams['min_cost_range'])
            prob = np.exp(-temperature * (costs - min_cost) / denom)
            prob /= np.sum(prob, axis=0)
            for rollout, p in zip(rollouts, prob):
                rollout.probabilities[d][:] = p

    def compute_parameter_updates(self):
        """
        Probability-weighted noise, reweighted per time step by its cost
        range and mapped through the projection.
        """
        self._check_active_rollouts()
        for d in range(self.dD):
            update = self.parameter_updates[d]
            update.fill(0.0)
            for r in range(self.num_rollouts):
                rollout = self.pool[r]
                update += rollout.noise[d] * rollout.probabilities[d]

            weights = self.time_step_weights[d]
            update *= weights
            weight_sum = max(np.sum(weights), self._hyperparams['min_weight_sum'])
            max_weight = max(np.max(weights), 0.0)
            divisor = max(weight_sum / self.T, max_weight)
            update /= divisor

            update[:] = self.projections[d].project(update)

    def improve_policy(self):
        """
        Compute the parameter update from the costs of the active rollouts.
        Returns:
            A list with one update vector per dimension, to be added to the
            policy parameters.
        """
        self._check_active_rollouts()
        with Timer('improve_policy'):
            self.compute_rollout_cumulative_costs()
            self.compute_rollout_probabilities()
            self.compute_parameter_updates()
        return [u.copy() for u in self.parameter_updates]

    def get_time_step_weights(self):
        self._check_initialized()
        return [w.copy() for w in self.time_step_weights]

    def get_all_rollouts(self):
        """ Copies of the active rollouts, in pool order. """
        self._check_initialized()
        return [copy.deepcopy(self.pool[r]) for r in range(self.num_rollouts)]

    def _copy_parameters_from_policy(self):
        parameters = self._query_policy('get_parameters')
        if len(parameters) != self.dD:
            raise UpstreamFailureError(
                'Policy returned parameters for %d dimensions, expected %d'
                % (len(parameters), self.dD))
        for d in range(self.dD):
            if np.shape(parameters[d]) != (self.num_parameters[d],):
                raise UpstreamFailureError(
                    'Policy parameters of dimension %d have shape %s, expected %s'
                    % (d, np.shape(parameters[d]), (self.num_parameters[d],)))
        for d in range(self.dD):
            self.parameters[d][:] = parameters[d]

    def _query_policy(self, method, *args, allow_none=False):
        """ Call a policy method, reporting any failure as upstream. """
        if self.policy is None:
            raise UpstreamFailureError('No policy set')
        try:
            value = getattr(self.policy, method)(*args)
        except Exception as e:
            LOGGER.error('Policy failed in %s: %s', method, e)
            raise UpstreamFailureError('Policy failed in %s: %s' % (method, e)) from e
        if value is None and not allow_none:
            raise UpstreamFailureError('Policy returned nothing from %s' % method)
        return value

    def _check_initialized(self):
        if not self._initialized:
            raise NotInitializedError('PolicyImprovement is not initialized')

    def _check_active_rollouts(self):
        self._check_initialized()
        if self.num_rollouts == 0:
            raise NoActiveRolloutsError(
                'No active rollouts, call generate_rollouts first')
