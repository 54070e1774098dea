# matrix.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence

import pandas as pd

from config import MAX_SCORE, NEUTRAL_SCORE, ROSTER_SIZE

Matrix = List[List[float]]


# =========================
# Zero-sum transform
# =========================
# Our score X against an opponent means they score MAX_SCORE - X, so the
# opponent's view is the transposed complement: opp[j][i] = 20 - m[i][j].

def opponent_matrix(matrix: Sequence[Sequence[float]]) -> Matrix:
    n = len(matrix)
    m = len(matrix[0]) if n else 0
    out: Matrix = [[0 for _ in range(n)] for __ in range(m)]
    for i in range(n):
        for j in range(m):
            out[j][i] = MAX_SCORE - matrix[i][j]
    return out


# =========================
# Validation
# =========================

def validate_matrix(matrix: Sequence[Sequence[float]], size: int = ROSTER_SIZE) -> Matrix:
    """
    Check a score matrix before handing it to the engine.

    The engine itself assumes a square matrix with in-range indices and never
    checks; callers that take matrices from users should go through here.
    """
    if len(matrix) != size:
        raise ValueError(f"Need exactly {size} rows, got {len(matrix)}.")
    out: Matrix = []
    for i, row in enumerate(matrix):
        if len(row) != size:
            raise ValueError(f"Row {i} has {len(row)} scores, expected {size}.")
        clean = []
        for j, x in enumerate(row):
            v = coerce_score(x)
            if v is None:
                raise ValueError(f"Score at ({i}, {j}) is not a number: {x!r}")
            if v < 0 or v > MAX_SCORE:
                raise ValueError(f"Score at ({i}, {j}) must be within 0-{MAX_SCORE}, got {v}.")
            clean.append(v)
        out.append(clean)
    return out


def coerce_score(x) -> Optional[float]:
    if isinstance(x, bool):
        return None
    try:
        if pd.isna(x):
            return None
        v = float(x)
    except (TypeError, ValueError):
        return None
    return int(v) if v.is_integer() else v


# =========================
# DataFrame conversion
# =========================

def matrix_from_frame(df: pd.DataFrame, size: int = ROSTER_SIZE) -> Matrix:
    """Rows are our members, columns the opponent's; labels are ignored."""
    if df.shape != (size, size):
        raise ValueError(f"Score table must be {size}x{size}, got {df.shape[0]}x{df.shape[1]}.")
    return validate_matrix(df.values.tolist(), size=size)


def matrix_to_frame(
    matrix: Sequence[Sequence[float]],
    own_names: Optional[Sequence[str]] = None,
    opp_names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    n = len(matrix)
    m = len(matrix[0]) if n else 0
    index = list(own_names) if own_names is not None else [f"A{i+1}" for i in range(n)]
    columns = list(opp_names) if opp_names is not None else [f"B{j+1}" for j in range(m)]
    return pd.DataFrame([list(row) for row in matrix], index=index, columns=columns)


# =========================
# Random boards
# =========================

def balanced_matrix(rng: random.Random, size: int = ROSTER_SIZE) -> Matrix:
    """
    Random board where m[i][j] + m[j][i] == MAX_SCORE and the diagonal is even,
    so neither side starts with an edge.
    """
    out: Matrix = [[NEUTRAL_SCORE for _ in range(size)] for __ in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            score = rng.randint(0, MAX_SCORE)
            out[i][j] = score
            out[j][i] = MAX_SCORE - score
    return out
