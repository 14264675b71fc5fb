"""Edit distance between normalized names."""

from __future__ import annotations


def distance(left: str, right: str) -> int:
    """Compute classic Levenshtein edit distance in O(m*n) with one rolling row."""
    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)

    previous = list(range(len(right) + 1))
    for i, left_ch in enumerate(left, start=1):
        current = [i]
        for j, right_ch in enumerate(right, start=1):
            insertion = current[j - 1] + 1
            deletion = previous[j] + 1
            substitution = previous[j - 1] + (0 if left_ch == right_ch else 1)
            current.append(min(insertion, deletion, substitution))
        previous = current
    return previous[-1]
