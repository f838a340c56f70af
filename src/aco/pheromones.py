import numpy as np

MIN_PHEROMONE = 1e-5


class PheromoneMatrix:
    def __init__(self, num_nodes, evaporation, intensity, initial=1.0):
        self.num_nodes = num_nodes
        self.evaporation = evaporation  # fraction kept each iteration
        self.intensity = intensity
        self.matrix = np.full((num_nodes, num_nodes), initial, dtype=float)

    def evaporate(self):
        self.matrix *= self.evaporation

    def deposit(self, tour):
        if tour.cost <= 0:
            return
        way = np.asarray(tour.way, dtype=int)
        # np.add.at so an edge listed twice still accumulates
        np.add.at(self.matrix, (way[:-1], way[1:]), self.intensity / tour.cost)

    def spread(self, population):
        """Evaporate, let every ant deposit on its own tour, then floor."""
        self.evaporate()
        for tour in population:
            self.deposit(tour)
        np.maximum(self.matrix, MIN_PHEROMONE, out=self.matrix)
