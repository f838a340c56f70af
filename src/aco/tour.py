from dataclasses import dataclass, field

import numpy as np

from src.datasets.matrixloader import as_cost_matrix


@dataclass(frozen=True, order=True, init=False)
class Tour:
    """
    A closed walk over every node of a cost matrix, with its cost precomputed.

    `way` holds N+1 node indices; way[0] == way[-1] and the first N entries
    are a permutation of 0..N-1. Tours compare (and sort) by cost only, so
    min() over a population keeps the first of several equal-cost tours.
    """
    cost: float
    way: tuple = field(compare=False)

    def __init__(self, way, cost_matrix):
        way = tuple(int(node) for node in way)
        if len(way) < 2:
            raise ValueError(f"a tour needs at least 2 entries (got {len(way)})")
        if way[0] != way[-1]:
            raise ValueError(f"tour is not closed: starts at {way[0]}, ends at {way[-1]}")
        n = len(cost_matrix)
        if len(way) != n + 1 or sorted(way[:-1]) != list(range(n)):
            raise ValueError(f"tour must visit each of the {n} nodes exactly once: {way}")

        way_arr = np.asarray(way)
        cost = np.asarray(cost_matrix)[way_arr[:-1], way_arr[1:]].sum()
        object.__setattr__(self, "way", way)
        object.__setattr__(self, "cost", cost.item())

    @classmethod
    def from_order(cls, order, cost_matrix):
        """Close a visiting order by returning to its first node."""
        order = list(order)
        if not order:
            raise ValueError("cannot build a tour from an empty order")
        return cls(order + [order[0]], cost_matrix)

    @property
    def order(self):
        return self.way[:-1]

    def edges(self):
        return list(zip(self.way, self.way[1:]))

    def contains_edge(self, i, j):
        return (i, j) in self.edges()

    def __len__(self):
        return len(self.way)

    def __str__(self):
        return " -> ".join(map(str, self.way))


class Solver:
    """Anything that turns a cost matrix into a tour."""

    def solve(self, cost_matrix) -> Tour:
        raise NotImplementedError

    @staticmethod
    def prepare(cost_matrix):
        return as_cost_matrix(cost_matrix)
