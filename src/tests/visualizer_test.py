from src.aco.config import AntQConfig
from src.aco.engine import AntQSolver
from src.aco.visualizer import draw_tour_animation, plot_convergence, tour_graph


def test_tour_graph_is_complete_digraph(chain_matrix):
    G, pos = tour_graph(chain_matrix)
    assert G.is_directed()
    assert G.number_of_edges() == 4 * 3
    assert G[3][0]["weight"] == 9.0
    assert set(pos) == {0, 1, 2, 3}


def test_animation_has_a_frame_per_iteration_plus_final(random_matrix):
    solver = AntQSolver(AntQConfig(max_iterations=4, population_size=3, seed=0))
    best = solver.solve(random_matrix)

    fig = draw_tour_animation(random_matrix, solver.iteration_bests, final_tour=best, show=False)

    assert len(fig.frames) == 5
    assert fig.frames[-1].name == "final"
    assert f"cost {best.cost:g}" in fig.frames[-1].data[1].name


def test_animation_without_tours(chain_matrix):
    fig = draw_tour_animation(chain_matrix, [], show=False)
    assert len(fig.frames) == 0
    assert len(fig.data) == 2


def test_convergence_plot_is_saved(tmp_path):
    path = tmp_path / "best.png"
    plot_convergence([30, 25, 25, 20], save_path=str(path))
    assert path.exists() and path.stat().st_size > 0
