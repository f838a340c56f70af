import numpy as np
from pathlib import Path


class CostMatrixError(ValueError):
    """Raised when a cost matrix is not a valid complete ATSP instance."""


# ------------------ Validation ------------------

def validate_cost_matrix(matrix):
    """
    Check that `matrix` is a non-empty square array with a zero diagonal
    and positive, finite weights everywhere else.
    """
    if matrix.ndim != 2 or matrix.shape[0] == 0 or matrix.shape[0] != matrix.shape[1]:
        raise CostMatrixError(f"cost matrix must be square and non-empty (got shape {matrix.shape})")

    diagonal = np.diagonal(matrix)
    bad_diag = np.flatnonzero(diagonal != 0)
    if bad_diag.size:
        i = int(bad_diag[0])
        raise CostMatrixError(f"diagonal elements must be zero (cost[{i}][{i}] = {matrix[i, i]})")

    off_diagonal = ~np.eye(matrix.shape[0], dtype=bool)
    bad = off_diagonal & ~(np.isfinite(matrix) & (matrix > 0))
    if bad.any():
        i, j = (int(x) for x in np.argwhere(bad)[0])
        raise CostMatrixError(
            f"non-diagonal elements must be positive and finite (cost[{i}][{j}] = {matrix[i, j]})"
        )
    return matrix


def as_cost_matrix(data):
    """Coerce nested sequences (or an array) into a validated numpy cost matrix."""
    if isinstance(data, np.ndarray):
        matrix = data
    else:
        rows = [list(row) for row in data]
        if any(len(row) != len(rows) for row in rows):
            raise CostMatrixError("rows and columns count mismatch")
        matrix = np.array(rows)
        if matrix.size == 0:
            matrix = matrix.reshape(0, 0)
    if not np.issubdtype(matrix.dtype, np.number) or np.issubdtype(matrix.dtype, np.complexfloating):
        raise CostMatrixError(f"cost matrix must hold real numbers (got dtype {matrix.dtype})")
    return validate_cost_matrix(matrix)


# ------------------ Loaders ------------------

def _parse_number(token):
    try:
        return int(token)
    except ValueError:
        try:
            return float(token)
        except ValueError:
            raise CostMatrixError(f"unable to parse matrix value {token!r}") from None


def parse_matrix_text(content):
    """Parse whitespace-separated rows, one matrix row per non-empty line."""
    rows = [[_parse_number(tok) for tok in line.split()] for line in content.splitlines() if line.strip()]
    return as_cost_matrix(rows)


def parse_tsplib_matrix(content):
    """
    Parse a TSPLIB file with EDGE_WEIGHT_TYPE EXPLICIT and
    EDGE_WEIGHT_FORMAT FULL_MATRIX (the usual ATSP layout).
    TSPLIB pads the diagonal with a large sentinel; it is reset to zero.
    """
    lines = content.strip().split('\n')

    # Parse header
    metadata = {}
    i = 0
    while i < len(lines) and not lines[i].strip().startswith('EDGE_WEIGHT_SECTION'):
        if ':' in lines[i]:
            key, value = lines[i].split(':', 1)
            metadata[key.strip().upper()] = value.strip()
        i += 1
    if i == len(lines):
        raise CostMatrixError("missing EDGE_WEIGHT_SECTION")

    weight_type = metadata.get('EDGE_WEIGHT_TYPE', 'EXPLICIT').upper()
    weight_format = metadata.get('EDGE_WEIGHT_FORMAT', 'FULL_MATRIX').upper()
    if weight_type != 'EXPLICIT' or weight_format != 'FULL_MATRIX':
        raise CostMatrixError(
            f"unsupported TSPLIB weights: {weight_type}/{weight_format} (need EXPLICIT/FULL_MATRIX)"
        )
    try:
        n = int(metadata['DIMENSION'])
    except (KeyError, ValueError):
        raise CostMatrixError("TSPLIB header must declare an integer DIMENSION") from None

    # Parse weights; the section may wrap rows across lines
    i += 1  # Skip EDGE_WEIGHT_SECTION line
    values = []
    while i < len(lines) and len(values) < n * n:
        line = lines[i].strip()
        if line.startswith('EOF') or (line and line[0].isalpha()):
            break
        values.extend(_parse_number(tok) for tok in line.split())
        i += 1
    if len(values) != n * n:
        raise CostMatrixError(f"expected {n * n} weights for DIMENSION {n}, found {len(values)}")

    matrix = np.array(values).reshape(n, n)
    np.fill_diagonal(matrix, 0)
    return as_cost_matrix(matrix)


def load_cost_matrix(path):
    """Load a cost matrix from a plain whitespace file or a TSPLIB explicit-matrix file."""
    content = Path(path).read_text(encoding="utf-8")
    if 'EDGE_WEIGHT_SECTION' in content:
        return parse_tsplib_matrix(content)
    return parse_matrix_text(content)


def random_cost_matrix(n, low=1, high=100, seed=None):
    """Complete directed instance with integer weights drawn uniformly from [low, high]."""
    if n < 1:
        raise CostMatrixError(f"node count must be positive (got {n})")
    if low < 1 or high < low:
        raise CostMatrixError(f"weight range must satisfy 1 <= low <= high (got [{low}, {high}])")
    if seed is not None and seed < 0:
        raise CostMatrixError(f"seed must be a non-negative integer (got {seed})")
    rng = np.random.default_rng(seed)
    matrix = rng.integers(low, high, size=(n, n), endpoint=True)
    np.fill_diagonal(matrix, 0)
    return matrix


# ------------------ Printing ------------------

def format_matrix(matrix):
    def fmt(x):
        return str(int(x)) if float(x).is_integer() else f"{x:.2f}"

    cells = [[fmt(x) for x in row] for row in np.asarray(matrix)]
    width = max((len(c) for row in cells for c in row), default=1)
    return "\n".join(" ".join(c.rjust(width) for c in row) for row in cells)
