import numpy as np


class HeuristicMatrix:
    """Reciprocal-distance desirability, 1 / cost[i][j]; the diagonal stays 0."""

    def __init__(self, cost_matrix):
        self.num_nodes = len(cost_matrix)
        self.matrix = np.zeros((self.num_nodes, self.num_nodes), dtype=float)
        off_diagonal = ~np.eye(self.num_nodes, dtype=bool)
        self.matrix[off_diagonal] = 1.0 / np.asarray(cost_matrix, dtype=float)[off_diagonal]
        self.matrix.setflags(write=False)


def recalculate_desirability(pheromone, heuristic, alpha, beta, out):
    """desirability[i][j] = pheromone[i][j]^alpha * heuristic[i][j]^beta, written into `out`."""
    np.power(pheromone, alpha, out=out)
    out *= np.power(heuristic, beta)
    return out
