import yaml
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "default.yaml"


class ConfigError(ValueError):
    """Raised when solver parameters are rejected."""


class ActionChoice(str, Enum):
    PSEUDO_RANDOM = "pseudo_random"
    PSEUDO_RANDOM_PROPORTIONAL = "pseudo_random_proportional"
    RANDOM_PROPORTIONAL = "random_proportional"


class DelayedReinforcement(str, Enum):
    GLOBAL_BEST = "global_best"
    ITERATION_BEST = "iteration_best"
    ANT_SYSTEM = "ant_system"


def load_config(path=DEFAULT_CONFIG_PATH):
    with open(Path(path), "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"cannot parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of parameters")
    return data


def _enum_value(enum_cls, value, key):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"{key} must be one of: {allowed} (got {value!r})") from None


def _check_range(key, value, low=None, high=None, low_open=False, high_open=False):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number (got {value!r})")
    if low is not None and (value <= low if low_open else value < low):
        raise ConfigError(f"{key} must be {'>' if low_open else '>='} {low} (got {value})")
    if high is not None and (value >= high if high_open else value > high):
        raise ConfigError(f"{key} must be {'<' if high_open else '<='} {high} (got {value})")


def _check_count(key, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer (got {value!r})")


@dataclass(frozen=True)
class ActionChoiceRule:
    """
    How an ant picks its next node.

    rule                  : which of the three choice rules to apply
    q_learning_importance : exponent on the Q-value term (lambda)
    heuristic_importance  : exponent on the desirability term (mu)
    q0                    : exploitation threshold, only used by the pseudo-random rules
    """
    rule: ActionChoice = ActionChoice.PSEUDO_RANDOM
    q_learning_importance: float = 1.0
    heuristic_importance: float = 1.0
    q0: float = 0.9

    def __post_init__(self):
        object.__setattr__(self, "rule", _enum_value(ActionChoice, self.rule, "action_choice.rule"))
        _check_range("action_choice.q_learning_importance", self.q_learning_importance, low=0.0)
        _check_range("action_choice.heuristic_importance", self.heuristic_importance, low=0.0)
        _check_range("action_choice.q0", self.q0, low=0.0, high=1.0)

    @property
    def exploits(self):
        return self.rule in (ActionChoice.PSEUDO_RANDOM, ActionChoice.PSEUDO_RANDOM_PROPORTIONAL)


@dataclass(frozen=True)
class AntQConfig:
    max_iterations: int = 1000
    population_size: int = 30
    seed: int | None = None

    pheromone_importance: float = 1.0    # alpha
    destination_importance: float = 2.0  # beta
    pheromone_intensity: float = 0.1
    pheromone_evaporation: float = 0.5   # rho, kept fraction per iteration

    learning_speed: float = 0.1
    next_action_importance: float = 0.3  # gamma
    reinforcement_reward: float = 10.0

    action_choice: ActionChoiceRule = field(default_factory=ActionChoiceRule)
    delayed_reinforcement: DelayedReinforcement = DelayedReinforcement.ITERATION_BEST

    def __post_init__(self):
        _check_count("max_iterations", self.max_iterations)
        _check_count("population_size", self.population_size)
        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, int) or not 0 <= self.seed < 2**64:
                raise ConfigError(f"seed must be an unsigned 64-bit integer or null (got {self.seed!r})")

        _check_range("pheromone_importance", self.pheromone_importance, low=0.0)
        _check_range("destination_importance", self.destination_importance, low=0.0)
        _check_range("pheromone_intensity", self.pheromone_intensity, low=0.0, low_open=True)
        _check_range("pheromone_evaporation", self.pheromone_evaporation,
                     low=0.0, high=1.0, low_open=True, high_open=True)
        _check_range("learning_speed", self.learning_speed, low=0.0, high=1.0)
        _check_range("next_action_importance", self.next_action_importance, low=0.0)
        _check_range("reinforcement_reward", self.reinforcement_reward, low=0.0, low_open=True)

        if isinstance(self.action_choice, dict):
            object.__setattr__(self, "action_choice", ActionChoiceRule(**self.action_choice))
        elif not isinstance(self.action_choice, ActionChoiceRule):
            raise ConfigError(f"action_choice must be a mapping (got {self.action_choice!r})")
        object.__setattr__(
            self, "delayed_reinforcement",
            _enum_value(DelayedReinforcement, self.delayed_reinforcement, "delayed_reinforcement"),
        )

    @classmethod
    def from_dict(cls, data, **overrides):
        """Build a config from a plain mapping (e.g. parsed YAML); `overrides` win over `data`."""
        merged = dict(data or {})
        merged.update({k: v for k, v in overrides.items() if v is not None})

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(merged) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")

        action_choice = merged.get("action_choice")
        if isinstance(action_choice, dict):
            allowed = {f.name for f in fields(ActionChoiceRule)}
            bad = sorted(set(action_choice) - allowed)
            if bad:
                raise ConfigError(f"unknown action_choice keys: {', '.join(bad)}")
        return cls(**merged)

    @classmethod
    def from_yaml(cls, path=DEFAULT_CONFIG_PATH, **overrides):
        return cls.from_dict(load_config(path), **overrides)
