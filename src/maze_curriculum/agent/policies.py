"""Exploration policies for the tabular agent.

Every policy owns its random generator(s), seeded at construction, so a
run is reproducible from its configuration alone. Candidate actions are
always put into canonical :class:`Action` order before a random index is
drawn, which makes tie-breaking independent of dict iteration order.

Softmax and VDBE evaluate their Boltzmann terms with :mod:`decimal` so
that very small temperatures (or inverse sensitivities) do not overflow.
"""

from __future__ import annotations

import abc
import random
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_DOWN, ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Dict, List

from ..errors import ConfigurationError
from .actions import Action, sorted_actions
from .q_table import QTable

VDBE_PRECISION = 100

# Sums and differences of finite decimals are exact in this context.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def _check_unit_interval(name: str, value: float) -> float:
    if not 0 <= value <= 1:
        raise ConfigurationError(f"Parameter [{name}] = {value} is not in [0, 1].")
    return float(value)


def _check_positive(name: str, value: float) -> float:
    if not value > 0:
        raise ConfigurationError(f"Parameter [{name}] = {value} has to be greater than 0.")
    return value


class ExplorationPolicy(abc.ABC):
    """Chooses the agent's next action from the Q-values of its state."""

    @abc.abstractmethod
    def choose_action(self, state: str, q_table: QTable) -> Action:
        ...

    def post_processing(
        self,
        state: str,
        action: Action,
        old_q_value: float,
        next_state: str,
        q_table: QTable,
    ) -> None:
        """Hook called after the Q-update of every step; no-op by default."""

    def parameters(self) -> Dict[str, object]:
        return {}

    def __repr__(self) -> str:
        args = ", ".join(f"{key} = {value}" for key, value in self.parameters().items())
        return f"{type(self).__name__}({args})"


class GreedyPolicy(ExplorationPolicy):
    """Always exploit; ties are broken uniformly at random."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self.random = random.Random(seed)

    def parameters(self) -> Dict[str, object]:
        return {"seed": self.seed}

    def choose_action(self, state: str, q_table: QTable) -> Action:
        values = q_table.actions(state)
        highest = max(values.values())
        best = sorted_actions(action for action, value in values.items() if value == highest)
        return best[self.random.randrange(len(best))]


class RandomPolicy(ExplorationPolicy):
    def __init__(self, seed: int) -> None:
        self.seed = seed
        self.random = random.Random(seed)

    def parameters(self) -> Dict[str, object]:
        return {"seed": self.seed}

    def choose_action(self, state: str, q_table: QTable) -> Action:
        actions = sorted_actions(q_table.actions(state))
        return actions[self.random.randrange(len(actions))]


class EpsilonGreedyPolicy(ExplorationPolicy):
    """Explore with probability ``epsilon``, otherwise act greedily.

    A uniform draw ``u`` selects the random policy when ``u <= epsilon``.
    """

    def __init__(self, epsilon: float, seed: int) -> None:
        self.seed = seed
        self._epsilon = _check_unit_interval("epsilon", epsilon)
        self.random = random.Random(seed)
        self.random_policy = RandomPolicy(seed)
        self.greedy_policy = GreedyPolicy(seed)

    @property
    def epsilon(self) -> float:
        return self._epsilon

    def set_epsilon(self, epsilon: float) -> None:
        self._epsilon = _check_unit_interval("epsilon", epsilon)

    def parameters(self) -> Dict[str, object]:
        return {"epsilon": self._epsilon, "seed": self.seed}

    def choose_action(self, state: str, q_table: QTable) -> Action:
        if self.random.random() <= self._epsilon:
            return self.random_policy.choose_action(state, q_table)
        return self.greedy_policy.choose_action(state, q_table)


class DecreasingEpsilonPolicy(ExplorationPolicy):
    """Epsilon-greedy whose epsilon shrinks by ``reducing_factor`` per choice."""

    def __init__(self, epsilon: float, reducing_factor: float, seed: int) -> None:
        if not 0 < reducing_factor < 1:
            raise ConfigurationError(f"Parameter [reducing_factor] = {reducing_factor} is not in (0, 1).")
        self.initial_epsilon = _check_unit_interval("epsilon", epsilon)
        self.reducing_factor = float(reducing_factor)
        self.seed = seed
        self.policy = EpsilonGreedyPolicy(epsilon, seed)

    @property
    def epsilon(self) -> float:
        return self.policy.epsilon

    def parameters(self) -> Dict[str, object]:
        return {"epsilon": self.initial_epsilon, "reducing_factor": self.reducing_factor, "seed": self.seed}

    def choose_action(self, state: str, q_table: QTable) -> Action:
        action = self.policy.choose_action(state, q_table)
        self.policy.set_epsilon(self.policy.epsilon * self.reducing_factor)
        return action


class EpsilonFirstPolicy(ExplorationPolicy):
    """Explore for the first ``exploration_actions`` choices, then exploit.

    Both phases are epsilon-greedy; only their epsilon differs.
    """

    def __init__(self, explore_epsilon: float, exploit_epsilon: float, exploration_actions: int, seed: int) -> None:
        if exploration_actions < 1:
            raise ConfigurationError(
                f"Parameter [exploration_actions] = {exploration_actions} has to be at least 1."
            )
        self.seed = seed
        self.exploration_actions = int(exploration_actions)
        self.explore_policy = EpsilonGreedyPolicy(explore_epsilon, seed)
        self.exploit_policy = EpsilonGreedyPolicy(exploit_epsilon, seed)
        self.actions_chosen = 0

    @property
    def exploring(self) -> bool:
        return self.actions_chosen < self.exploration_actions

    def parameters(self) -> Dict[str, object]:
        return {
            "explore_epsilon": self.explore_policy.epsilon,
            "exploit_epsilon": self.exploit_policy.epsilon,
            "exploration_actions": self.exploration_actions,
            "seed": self.seed,
        }

    def choose_action(self, state: str, q_table: QTable) -> Action:
        self.actions_chosen += 1
        if self.actions_chosen <= self.exploration_actions:
            return self.explore_policy.choose_action(state, q_table)
        return self.exploit_policy.choose_action(state, q_table)


class SoftmaxPolicy(ExplorationPolicy):
    """Boltzmann selection over the Q-values of a state.

    Parameters
    ----------
    temperature:
        Positive. High values make all actions nearly equiprobable, low
        values approach greedy behaviour.
    precision:
        Number of significant digits used for the exponentials and the
        resulting probabilities.
    seed:
        Seed of the generator used for the selection draw.
    """

    def __init__(self, temperature: float, precision: int, seed: int) -> None:
        self.temperature = float(_check_positive("temperature", temperature))
        self.precision = int(_check_positive("precision", precision))
        self.seed = seed
        self.random = random.Random(seed)
        self.context = Context(prec=self.precision, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)

    def parameters(self) -> Dict[str, object]:
        return {"temperature": self.temperature, "precision": self.precision, "seed": self.seed}

    def probabilities(self, state: str, q_table: QTable) -> List[Decimal]:
        """Selection probability of each action, in canonical action order."""

        values = q_table.actions(state)
        actions = sorted_actions(values)
        # exp(q/T) / sum exp(q/T) is unchanged by shifting every q by the maximum.
        highest = Decimal(repr(max(values.values())))
        shifted = [_EXACT.subtract(Decimal(repr(values[a])), highest) for a in actions]
        tau = Decimal(repr(self.temperature))
        with localcontext(self.context) as ctx:
            weights = [ctx.exp(ctx.divide(value, tau)) for value in shifted]
            denominator = Decimal(0)
            for weight in weights:
                denominator = ctx.add(denominator, weight)
            return [ctx.divide(weight, denominator) for weight in weights]

    def choose_action(self, state: str, q_table: QTable) -> Action:
        actions = sorted_actions(q_table.actions(state))
        probabilities = self.probabilities(state, q_table)

        with localcontext(_EXACT):
            # Rounded probabilities need not add up to exactly 1.
            total = sum(probabilities, Decimal(0))
            draw = Decimal(float(total) * self.random.random())

            lower = Decimal(0)
            for action, probability in zip(actions, probabilities):
                upper = lower + probability
                if lower <= draw <= upper:
                    return action
                lower = upper
        return actions[-1]


class VDBEPolicy(ExplorationPolicy):
    """Value-Difference Based Exploration.

    Epsilon-greedy with one epsilon per state. After each step the epsilon
    of the state just left moves towards a Boltzmann activation of how much
    the Q-value of the chosen action changed: large changes push it up,
    no change pulls it down. The learn rate is one over the number of
    actions available in that state.
    """

    def __init__(self, inverse_sensitivity: float, epsilon: float, seed: int) -> None:
        self.inverse_sensitivity = float(_check_positive("inverse_sensitivity", inverse_sensitivity))
        self.initial_epsilon = _check_unit_interval("epsilon", epsilon)
        self.seed = seed
        self.policy = EpsilonGreedyPolicy(epsilon, seed)
        self.context = Context(prec=VDBE_PRECISION, rounding=ROUND_DOWN, Emax=MAX_EMAX, Emin=MIN_EMIN)
        self._epsilons: Dict[str, float] = {}

    def parameters(self) -> Dict[str, object]:
        return {
            "inverse_sensitivity": self.inverse_sensitivity,
            "epsilon": self.initial_epsilon,
            "seed": self.seed,
        }

    def epsilon(self, state: str) -> float:
        return self._epsilons.get(state, self.initial_epsilon)

    def choose_action(self, state: str, q_table: QTable) -> Action:
        self._epsilons.setdefault(state, self.initial_epsilon)
        self.policy.set_epsilon(self._epsilons[state])
        return self.policy.choose_action(state, q_table)

    def post_processing(
        self,
        state: str,
        action: Action,
        old_q_value: float,
        next_state: str,
        q_table: QTable,
    ) -> None:
        activation = self.activation(old_q_value, q_table.get(state, action))
        learn_rate = 1 / len(q_table.actions(state))
        self._epsilons[state] = learn_rate * activation + (1 - learn_rate) * self.epsilon(state)

    def activation(self, old_q_value: float, new_q_value: float) -> float:
        """``|e_old - e_new| / (e_old + e_new)`` with ``e = exp(q / sigma)``."""

        sigma = Decimal(repr(self.inverse_sensitivity))
        with localcontext(self.context) as ctx:
            old_term = ctx.exp(ctx.divide(Decimal(repr(old_q_value)), sigma))
            new_term = ctx.exp(ctx.divide(Decimal(repr(new_q_value)), sigma))
            denominator = ctx.add(old_term, new_term)
            first = ctx.divide(old_term, denominator)
            second = ctx.divide(new_term, denominator)
            return float(abs(ctx.subtract(first, second)))
