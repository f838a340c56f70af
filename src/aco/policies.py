import numpy as np

from src.aco.config import ActionChoice, DelayedReinforcement


# ---------- Action choice ----------

def selection_weights(rule, q_row, desirability_row, candidates):
    """Q[from][k]^lambda * desirability[from][k]^mu for every candidate k."""
    return (np.power(q_row[candidates], rule.q_learning_importance)
            * np.power(desirability_row[candidates], rule.heuristic_importance))


def exploit(candidates, weights):
    # argmax returns the first maximum, i.e. the lowest node index on ties
    return int(candidates[int(np.argmax(weights))])


def uniform_choice(candidates, rng):
    return int(candidates[rng.integers(len(candidates))])


def proportional_choice(candidates, weights, rng):
    """
    Roulette wheel: normalize weights, draw u in [0, 1) and take the first
    candidate whose cumulative weight exceeds u.
    """
    total = weights.sum()
    if not np.isfinite(total) or total <= 0:
        return uniform_choice(candidates, rng)
    cum_probs = np.cumsum(weights / total)
    idx = int(np.searchsorted(cum_probs, rng.random(), side="right"))
    # rounding can leave cum_probs[-1] a hair below 1.0
    return int(candidates[min(idx, len(candidates) - 1)])


def choose_next_node(rule, current, candidates, q, desirability, rng):
    """
    Pick the next node for an ant sitting on `current`.

    candidates : ascending array of unvisited node indices (non-empty)
    q          : Q-value matrix
    """
    if not rule.exploits:
        weights = selection_weights(rule, q[current], desirability[current], candidates)
        return proportional_choice(candidates, weights, rng)

    exploiting = rng.random() <= rule.q0
    # explore among unvisited nodes only so every tour stays Hamiltonian
    if rule.rule is ActionChoice.PSEUDO_RANDOM and not exploiting:
        return uniform_choice(candidates, rng)

    weights = selection_weights(rule, q[current], desirability[current], candidates)
    if exploiting:
        return exploit(candidates, weights)
    return proportional_choice(candidates, weights, rng)


# ---------- Delayed reinforcement ----------

def _reward_tour(delta, tour, reward):
    if tour.cost <= 0:
        return
    way = np.asarray(tour.way, dtype=int)
    np.add.at(delta, (way[:-1], way[1:]), reward / tour.cost)


def delayed_reinforcement(kind, num_nodes, population, iteration_best, global_best, reward):
    """
    Build the delta-Q matrix for the end of an iteration.

    Returns (delta, edges). `edges` lists the cells to blend for the
    best-tour rules; it is None for ant_system, which blends every cell.
    """
    delta = np.zeros((num_nodes, num_nodes), dtype=float)
    if kind is DelayedReinforcement.ANT_SYSTEM:
        for tour in population:
            _reward_tour(delta, tour, reward)
        return delta, None

    if kind is DelayedReinforcement.GLOBAL_BEST:
        best = global_best
    elif kind is DelayedReinforcement.ITERATION_BEST:
        best = iteration_best
    else:
        raise ValueError(f"unknown delayed reinforcement rule: {kind!r}")
    _reward_tour(delta, best, reward)
    return delta, best.edges()
