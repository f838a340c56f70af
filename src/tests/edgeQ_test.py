import numpy as np
import pytest

from src.rl.edgeQ import MIN_Q, EdgeQ


def unvisited(*nodes, n=4):
    mask = np.zeros(n, dtype=bool)
    mask[list(nodes)] = True
    return mask


def test_initial_value_scales_with_average_edge(chain_matrix):
    # off-diagonal costs sum to 60 over 12 edges -> mean 5; 1 / (5 * 4)
    learner = EdgeQ(chain_matrix)
    assert np.allclose(learner.Q, 0.05)


def test_single_node_initial_value():
    assert EdgeQ([[0]]).Q[0, 0] == 1.0


def test_max_future_over_unvisited_only(chain_matrix):
    learner = EdgeQ(chain_matrix)
    learner.Q[1, 2] = 0.7
    learner.Q[1, 3] = 0.4
    learner.Q[1, 0] = 9.0
    assert learner.max_future(1, unvisited(2, 3)) == pytest.approx(0.7)
    assert learner.max_future(1, unvisited(3)) == pytest.approx(0.4)
    assert learner.max_future(1, unvisited()) == 0.0


def test_learn_hop_td_rule(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=0.5, gamma=0.5)
    learner.learn_hop([(0, 1, unvisited(2, 3))])
    # 0.5 * 0.05 + 0.5 * 0.5 * 0.05
    assert learner.Q[0, 1] == pytest.approx(0.0375)
    assert learner.Q[1, 0] == pytest.approx(0.05)


def test_learn_hop_reads_pre_hop_table(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=0.5, gamma=0.5)
    # second ant bootstraps from Q[1][*] which the first ant's write must not affect yet
    learner.learn_hop([
        (2, 1, unvisited(0, 3)),
        (0, 2, unvisited(1)),
    ])
    assert learner.Q[2, 1] == pytest.approx(0.0375)
    assert learner.Q[0, 2] == pytest.approx(0.0375)


def test_learn_hop_shared_edge_last_ant_wins(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=0.5, gamma=0.5)
    learner.learn_hop([
        (0, 1, unvisited(2, 3)),
        (0, 1, unvisited()),
    ])
    # computed from the pre-hop 0.05, not from the first ant's 0.0375
    assert learner.Q[0, 1] == pytest.approx(0.025)


def test_learn_hop_floors_values(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=1.0, gamma=0.0)
    learner.learn_hop([(0, 1, unvisited(2, 3))])
    assert learner.Q[0, 1] == MIN_Q


def test_reinforce_selected_edges_only(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=0.5)
    delta = np.zeros((4, 4))
    delta[0, 1] = 1.0

    learner.reinforce(delta, edges=[(0, 1), (1, 2)])

    assert learner.Q[0, 1] == pytest.approx(0.5 * 0.05 + 0.5 * 1.0)
    assert learner.Q[1, 2] == pytest.approx(0.025)
    assert learner.Q[2, 3] == pytest.approx(0.05)


def test_reinforce_every_cell(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=0.5)
    delta = np.zeros((4, 4))
    delta[0, 1] = 1.0

    learner.reinforce(delta)

    assert learner.Q[0, 1] == pytest.approx(0.525)
    assert learner.Q[2, 3] == pytest.approx(0.025)


def test_reinforce_floors_values(chain_matrix):
    learner = EdgeQ(chain_matrix, alpha=1.0)
    learner.reinforce(np.zeros((4, 4)))
    assert np.all(learner.Q == MIN_Q)
