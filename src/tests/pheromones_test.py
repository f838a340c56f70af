import numpy as np
import pytest

from src.aco.heuristics import HeuristicMatrix, recalculate_desirability
from src.aco.pheromones import MIN_PHEROMONE, PheromoneMatrix
from src.aco.tour import Tour


def test_pheromone_starts_at_one():
    pheromones = PheromoneMatrix(4, evaporation=0.5, intensity=1.0)
    assert np.all(pheromones.matrix == 1.0)


def test_spread_evaporates_then_deposits(chain_matrix):
    pheromones = PheromoneMatrix(4, evaporation=0.5, intensity=1.0)
    tour = Tour.from_order([0, 1, 2, 3], chain_matrix)  # cost 12
    other = Tour.from_order([0, 2, 1, 3], chain_matrix)  # cost 28, shares edge 3 -> 0

    pheromones.spread([tour, other])

    assert pheromones.matrix[0, 1] == pytest.approx(0.5 + 1 / 12)
    assert pheromones.matrix[0, 2] == pytest.approx(0.5 + 1 / 28)
    assert pheromones.matrix[3, 0] == pytest.approx(0.5 + 1 / 12 + 1 / 28)
    assert pheromones.matrix[1, 0] == pytest.approx(0.5)


def test_spread_floors_at_minimum():
    pheromones = PheromoneMatrix(3, evaporation=0.01, intensity=1.0)
    for _ in range(3):
        pheromones.spread([])
    assert pheromones.matrix.min() == MIN_PHEROMONE
    assert np.all(pheromones.matrix == MIN_PHEROMONE)


def test_zero_cost_tour_deposits_nothing():
    pheromones = PheromoneMatrix(1, evaporation=0.5, intensity=1.0)
    pheromones.deposit(Tour([0, 0], [[0]]))
    assert pheromones.matrix[0, 0] == 1.0


def test_heuristic_is_reciprocal_cost(chain_matrix):
    heuristic = HeuristicMatrix(chain_matrix)
    assert heuristic.matrix[0, 1] == pytest.approx(1.0)
    assert heuristic.matrix[0, 2] == pytest.approx(1 / 9)
    assert np.all(np.diagonal(heuristic.matrix) == 0)


def test_heuristic_is_read_only(chain_matrix):
    heuristic = HeuristicMatrix(chain_matrix)
    with pytest.raises(ValueError):
        heuristic.matrix[0, 1] = 5.0


def test_desirability_combines_pheromone_and_heuristic(chain_matrix):
    heuristic = HeuristicMatrix(chain_matrix)
    pheromone = np.full((4, 4), 2.0)
    out = np.zeros((4, 4))

    recalculate_desirability(pheromone, heuristic.matrix, alpha=1.0, beta=2.0, out=out)

    assert out[0, 1] == pytest.approx(2.0 * 1.0)
    assert out[0, 2] == pytest.approx(2.0 * (1 / 9) ** 2)
    assert np.all(pheromone == 2.0)
