from __future__ import annotations

from typing import List


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit cost for insert, delete and substitute."""
    rows = len(b) + 1
    cols = len(a) + 1
    matrix: List[List[int]] = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],  # substitute
                    matrix[i][j - 1],      # insert
                    matrix[i - 1][j],      # delete
                )
    return matrix[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """
    Similarity in [0, 1] derived from edit distance relative to the longer
    string. Two empty strings are identical (1.0).
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - edit_distance(a, b)) / max_len
