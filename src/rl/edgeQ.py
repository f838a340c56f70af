import numpy as np

MIN_Q = 1e-5


class EdgeQ:
    def __init__(self, cost_matrix, alpha=0.1, gamma=0.3):
        """
        cost_matrix : validated N x N cost matrix
        alpha       : learning speed; updates keep (1 - alpha) of the old value
        gamma       : weight of the best follow-up action in the TD target
        """
        self.n = len(cost_matrix)
        self.alpha = alpha
        self.gamma = gamma

        # Q-table: learned value of taking edge i -> j, same scale as reward / tour cost
        self.Q = np.full((self.n, self.n), self.initial_value(cost_matrix), dtype=float)

    @staticmethod
    def initial_value(cost_matrix):
        n = len(cost_matrix)
        if n < 2:
            return 1.0
        costs = np.asarray(cost_matrix, dtype=float)
        mean_edge = costs[~np.eye(n, dtype=bool)].mean()
        return 1.0 / (mean_edge * n)

    def max_future(self, node, unvisited):
        """Best Q[node][k] over the still-unvisited nodes k, or 0 when none are left."""
        if not unvisited.any():
            return 0.0
        return float(self.Q[node, unvisited].max())

    def learn_hop(self, transitions):
        """
        TD update for one synchronized hop of the whole colony.

        transitions : list of (from_node, to_node, unvisited_mask) with the mask
                      taken after the ant moved. Every target is computed before
                      any write so all ants bootstrap from the same pre-hop table.
        """
        updates = [
            (i, j, (1 - self.alpha) * self.Q[i, j] + self.alpha * self.gamma * self.max_future(j, unvisited))
            for i, j, unvisited in transitions
        ]
        # Ants sharing an edge in the same hop: the last one in colony order wins
        for i, j, value in updates:
            self.Q[i, j] = value
        np.maximum(self.Q, MIN_Q, out=self.Q)

    def reinforce(self, delta, edges=None):
        """
        Blend a delayed-reinforcement matrix into Q.
        With `edges` only those cells move; otherwise every cell does, so edges
        without reward decay toward zero (and then the floor).
        """
        if edges is None:
            self.Q *= (1 - self.alpha)
            self.Q += self.alpha * delta
        else:
            for i, j in edges:
                self.Q[i, j] = (1 - self.alpha) * self.Q[i, j] + self.alpha * delta[i, j]
        np.maximum(self.Q, MIN_Q, out=self.Q)
