# ----------------- main.py -----------------
import argparse
import logging
import sys

from src.aco.config import (
    DEFAULT_CONFIG_PATH, ActionChoice, AntQConfig, ConfigError, DelayedReinforcement, load_config,
)
from src.aco.engine import AntQSolver
from src.aco.greedy import GreedySolver
from src.aco.visualizer import draw_tour_animation, plot_convergence
from src.datasets.matrixloader import CostMatrixError, format_matrix, load_cost_matrix, random_cost_matrix

logger = logging.getLogger(__name__)


def build_argparser():
    p = argparse.ArgumentParser(
        prog="antq-tsp",
        description="Ant-Q and greedy solvers for the asymmetric traveling salesman problem.",
    )
    p.add_argument("--algorithm", choices=["greedy", "antq"], default="antq", help="Solver to run")

    src = p.add_argument_group("Cost matrix")
    source = src.add_mutually_exclusive_group(required=True)
    source.add_argument("--file", type=str, help="Whitespace or TSPLIB (EXPLICIT/FULL_MATRIX) matrix file")
    source.add_argument("--random", type=int, metavar="N", help="Generate a random N x N matrix")
    src.add_argument("--low", type=int, default=1, help="Minimum random weight")
    src.add_argument("--high", type=int, default=100, help="Maximum random weight")
    src.add_argument("--seed", type=int, default=None, help="Seed for matrix generation and the solver")

    aq = p.add_argument_group("Ant-Q")
    aq.add_argument("--config", type=str, default=None, help=f"YAML config file (default: {DEFAULT_CONFIG_PATH.name})")
    aq.add_argument("--iterations", type=int, default=None, help="Override max_iterations")
    aq.add_argument("--population", type=int, default=None, help="Override population_size")
    aq.add_argument("--action-choice", choices=[r.value for r in ActionChoice], default=None)
    aq.add_argument("--reinforcement", choices=[r.value for r in DelayedReinforcement], default=None)

    out = p.add_argument_group("Output")
    out.add_argument("--plot", type=str, default=None, help="Save a convergence plot (Ant-Q only)")
    out.add_argument("--show", action="store_true", help="Open the interactive tour animation (Ant-Q only)")
    out.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def build_config(args):
    if args.config:
        data = load_config(args.config)
    else:
        data = load_config() if DEFAULT_CONFIG_PATH.exists() else {}
    if args.action_choice is not None:
        action_choice = data.get("action_choice") or {}
        if not isinstance(action_choice, dict):
            raise ConfigError(f"action_choice must be a mapping (got {action_choice!r})")
        action_choice = dict(action_choice)
        action_choice["rule"] = args.action_choice
        data["action_choice"] = action_choice
    return AntQConfig.from_dict(
        data,
        seed=args.seed,
        max_iterations=args.iterations,
        population_size=args.population,
        delayed_reinforcement=args.reinforcement,
    )


def main(argv=None):
    parser = build_argparser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.algorithm == "antq":
            solver = AntQSolver(build_config(args))
        else:
            solver = GreedySolver()

        if args.file:
            cost_matrix = load_cost_matrix(args.file)
        else:
            cost_matrix = random_cost_matrix(args.random, low=args.low, high=args.high, seed=args.seed)
    except (ConfigError, CostMatrixError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print("Matrix:")
    print(format_matrix(cost_matrix))

    solution = solver.solve(cost_matrix)
    print(f"Way: {solution}")
    print(f"Score: {solution.cost}")

    if isinstance(solver, AntQSolver):
        if args.plot:
            plot_convergence(solver.best_cost_history, save_path=args.plot)
            logger.info("Saved convergence plot to %s", args.plot)
        if args.show:
            draw_tour_animation(cost_matrix, solver.iteration_bests, final_tour=solution)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
