import logging

import numpy as np

from src.aco.tour import Solver, Tour

logger = logging.getLogger(__name__)

START_NODE = 0


class GreedySolver(Solver):
    """Nearest-neighbour tour from node 0; ties go to the lowest node index."""

    def solve(self, cost_matrix):
        cost_matrix = self.prepare(cost_matrix)
        num_nodes = len(cost_matrix)

        visited = np.zeros(num_nodes, dtype=bool)
        order = [START_NODE]
        visited[START_NODE] = True
        node = START_NODE
        while not visited.all():
            candidates = np.flatnonzero(~visited)
            node = int(candidates[np.argmin(cost_matrix[node, candidates])])
            visited[node] = True
            order.append(node)

        tour = Tour.from_order(order, cost_matrix)
        logger.info("Greedy: %d nodes, cost %s", num_nodes, tour.cost)
        return tour
