"""Edit distance algorithms used for typo-tolerant matching.

Both functions operate on Python strings, i.e. sequences of Unicode code
points, so multi-byte characters (including astral-plane ones) are always
compared as single units.
"""

from typing import List


def levenshtein(a: str, b: str) -> int:
    """
    Compute the Levenshtein distance between two strings (Wagner-Fischer).
    
    Only two rows are kept, each sized by the shorter string, giving
    O(min(m, n)) space.
    
    Args:
        a: First string
        b: Second string
        
    Returns:
        Minimum number of single-character insertions, deletions and
        substitutions turning ``a`` into ``b``
    """
    # the shorter string drives the row width
    if len(a) > len(b):
        a, b = b, a
    
    if not a:
        return len(b)
    
    previous = list(range(len(a) + 1))
    for j, cb in enumerate(b, start=1):
        current = [j] + [0] * len(a)
        for i, ca in enumerate(a, start=1):
            cost = 0 if ca == cb else 1
            current[i] = min(
                previous[i] + 1,         # insertion
                current[i - 1] + 1,      # deletion
                previous[i - 1] + cost,  # substitution
            )
        previous = current
    
    return previous[-1]


def damerau_levenshtein(a: str, b: str) -> int:
    """
    Compute the restricted Damerau-Levenshtein (optimal string alignment) distance.
    
    Like :func:`levenshtein`, but swapping two adjacent characters counts as a
    single edit. Uses a full (m+1) x (n+1) matrix.
    
    Not used for fuzzy tier scoring: there a transposition still costs 2.
    """
    m, n = len(a), len(b)
    if m == 0:
        return n
    if n == 0:
        return m
    
    matrix: List[List[int]] = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        matrix[i][0] = i
    for j in range(n + 1):
        matrix[0][j] = j
    
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost,
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                matrix[i][j] = min(matrix[i][j], matrix[i - 2][j - 2] + 1)
    
    return matrix[m][n]
