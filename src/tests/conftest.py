import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from src.datasets.matrixloader import random_cost_matrix

# Cheap chain 0 -> 1 -> 2 -> 3 plus an expensive way back
CHAIN = [
    [0, 1, 9, 9],
    [1, 0, 1, 9],
    [9, 1, 0, 1],
    [9, 9, 1, 0],
]


@pytest.fixture
def chain_matrix():
    return np.array(CHAIN)


@pytest.fixture
def random_matrix():
    return random_cost_matrix(8, low=1, high=50, seed=7)


@pytest.fixture
def chain_file(tmp_path):
    path = tmp_path / "chain.txt"
    path.write_text("\n".join(" ".join(map(str, row)) for row in CHAIN) + "\n", encoding="utf-8")
    return path
