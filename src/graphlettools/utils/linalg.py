from __future__ import annotations

from fractions import Fraction


def _gauss_jordan(rows: list[list[Fraction]], n_cols: int) -> list[int]:
    """In-place reduced row echelon form over the rationals; returns pivot columns."""
    pivots: list[int] = []
    top = 0
    for col in range(n_cols):
        if top == len(rows):
            break
        piv = next((r for r in range(top, len(rows)) if rows[r][col] != 0), None)
        if piv is None:
            continue
        rows[top], rows[piv] = rows[piv], rows[top]
        lead = rows[top][col]
        rows[top] = [x / lead for x in rows[top]]
        for r, row in enumerate(rows):
            if r != top and row[col] != 0:
                factor = row[col]
                rows[r] = [x - factor * y for x, y in zip(row, rows[top])]
        pivots.append(col)
        top += 1
    return pivots


def exact_rank(
    M: list[list[int | Fraction]],
    n_rows: int,
    n_cols: int,
) -> int:
    """Exact rank of an integer/rational matrix."""
    rows = [[Fraction(M[i][j]) for j in range(n_cols)] for i in range(n_rows)]
    return len(_gauss_jordan(rows, n_cols))


def exact_inverse(M: list[list[int | Fraction]], n: int) -> list[list[Fraction]]:
    """Inverse of a square n x n matrix, by elimination on [M | I].

    Raises ValueError if M is singular.
    """
    rows = [
        [Fraction(M[i][j]) for j in range(n)] + [Fraction(int(i == j)) for j in range(n)]
        for i in range(n)
    ]
    pivots = _gauss_jordan(rows, 2 * n)
    if pivots[:n] != list(range(n)):
        raise ValueError("matrix is singular")
    return [row[n:] for row in rows]
