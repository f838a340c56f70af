import numpy as np

from src.aco.policies import choose_next_node
from src.aco.tour import Tour


class Ant:
    """Construction state of one ant during a single iteration."""

    def __init__(self, start_node, num_nodes):
        self.start_node = start_node
        self.current_node = start_node
        self.num_nodes = num_nodes
        self.tour = [start_node]
        self.visited = np.zeros(num_nodes, dtype=bool)
        self.visited[start_node] = True

    @property
    def unvisited(self):
        return ~self.visited

    @property
    def finished(self):
        """True once the ant has walked back to its start node."""
        return len(self.tour) == self.num_nodes + 1

    def choose_next_node(self, rule, q, desirability, rng):
        """Next hop for this ant; the start node once everything is visited."""
        candidates = np.flatnonzero(self.unvisited)
        if len(candidates) == 0:
            return self.start_node
        return choose_next_node(rule, self.current_node, candidates, q, desirability, rng)

    def move_to(self, node):
        """Apply a hop and return the (from, to) edge just taken."""
        prev_node = self.current_node
        self.current_node = node
        self.tour.append(node)
        self.visited[node] = True
        return prev_node, node

    def to_tour(self, cost_matrix):
        return Tour(self.tour, cost_matrix)
