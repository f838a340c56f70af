import logging

import numpy as np

from src.aco.ant import Ant
from src.aco.config import AntQConfig
from src.aco.heuristics import HeuristicMatrix, recalculate_desirability
from src.aco.pheromones import PheromoneMatrix
from src.aco.policies import delayed_reinforcement
from src.aco.tour import Solver
from src.rl.edgeQ import EdgeQ

logger = logging.getLogger(__name__)


class AntQRun:
    """
    One Ant-Q solve in progress. Iterating it runs one generation per step
    and yields the global-best tour found so far.

    The pheromone and Q matrices belong to this object alone and live only
    as long as the run does.
    """

    def __init__(self, cost_matrix, config: AntQConfig):
        self.cost_matrix = cost_matrix
        self.config = config
        self.num_nodes = len(cost_matrix)
        self.rng = np.random.default_rng(config.seed)

        self.heuristic = HeuristicMatrix(cost_matrix)
        self.pheromones = PheromoneMatrix(self.num_nodes, config.pheromone_evaporation, config.pheromone_intensity)
        self.desirability = np.zeros((self.num_nodes, self.num_nodes), dtype=float)
        self.Qlearner = EdgeQ(cost_matrix, alpha=config.learning_speed, gamma=config.next_action_importance)

        self.iteration = 0
        self.best_tour = None
        self.best_iter_tour = None
        self.best_cost_history = []   # global best after each iteration
        self.iteration_bests = []     # iteration-best tour of each iteration

    def __iter__(self):
        return self

    def __next__(self):
        if self.iteration >= self.config.max_iterations:
            raise StopIteration
        self.iteration += 1

        recalculate_desirability(
            self.pheromones.matrix, self.heuristic.matrix,
            self.config.pheromone_importance, self.config.destination_importance,
            out=self.desirability,
        )
        population = self.build_population()

        self.best_iter_tour = min(population)
        self.iteration_bests.append(self.best_iter_tour)
        self.update_best(self.best_iter_tour)

        delta, edges = delayed_reinforcement(
            self.config.delayed_reinforcement, self.num_nodes, population,
            self.best_iter_tour, self.best_tour, self.config.reinforcement_reward,
        )
        self.Qlearner.reinforce(delta, edges)
        self.pheromones.spread(population)

        self.best_cost_history.append(self.best_tour.cost)
        logger.debug("Iteration %d: iteration best %s, best %s",
                     self.iteration, self.best_iter_tour.cost, self.best_tour.cost)
        return self.best_tour

    def update_best(self, candidate):
        # a candidate that is not worse replaces the stored best
        if self.best_tour is None or candidate <= self.best_tour:
            self.best_tour = candidate
        return self.best_tour

    def build_population(self):
        """
        Construct every ant's tour with all ants hopping in lock-step.

        Each hop is: every ant chooses (all reading the same Q table),
        every ant moves, then one Q update for the whole colony.
        The last hop takes each ant back to its start node.
        """
        ants = [Ant(int(self.rng.integers(self.num_nodes)), self.num_nodes)
                for _ in range(self.config.population_size)]
        rule = self.config.action_choice

        while not all(ant.finished for ant in ants):
            choices = [ant.choose_next_node(rule, self.Qlearner.Q, self.desirability, self.rng)
                       for ant in ants]
            transitions = []
            for ant, node in zip(ants, choices):
                prev_node, new_node = ant.move_to(node)
                transitions.append((prev_node, new_node, ant.unvisited))
            self.Qlearner.learn_hop(transitions)

        return [ant.to_tour(self.cost_matrix) for ant in ants]


class AntQSolver(Solver):
    def __init__(self, config: AntQConfig | None = None):
        self.config = config or AntQConfig()
        self.best_cost_history = []
        self.iteration_bests = []

    def iterate(self, cost_matrix):
        """Start a fresh run; iterate it to get the global best after each iteration."""
        run = AntQRun(self.prepare(cost_matrix), self.config)
        self.best_cost_history = run.best_cost_history
        self.iteration_bests = run.iteration_bests
        return run

    def solve(self, cost_matrix):
        run = self.iterate(cost_matrix)
        logger.info("Ant-Q: %d nodes, %d ants, %d iterations",
                    run.num_nodes, self.config.population_size, self.config.max_iterations)
        best = None
        for best in run:
            pass
        logger.info("Ant-Q best cost %s after %d iterations", best.cost, run.iteration)
        return best
