"""Query tokenization and in-order substring matching.

A query such as ``"fo ba"`` matches any text containing ``fo`` and then,
somewhere later, ``ba``. Tokens are literal text, never regex syntax, and
matching is a left-to-right ``str.find`` scan, so its cost stays linear in
the length of the text however long a stored command gets.
"""

from __future__ import annotations


def tokenize(query: str) -> list[str]:
    return query.split()


def match_positions(text: str, tokens: list[str]) -> list[int] | None:
    """Character indices covered by the leftmost in-order token matches.

    Returns ``None`` when the tokens do not all occur in order.
    """
    positions: list[int] = []
    start = 0
    for token in tokens:
        index = text.find(token, start)
        if index < 0:
            return None
        positions.extend(range(index, index + len(token)))
        start = index + len(token)
    return positions


def matches(text: str, tokens: list[str]) -> bool:
    """True when *text* contains every token, in order.

    No tokens match everything.
    """
    start = 0
    for token in tokens:
        index = text.find(token, start)
        if index < 0:
            return False
        start = index + len(token)
    return True


def coverage(text: str, tokens: list[str]) -> float:
    """Share of *text* made up of the query tokens, in ``[0, 1]``."""
    if not text or not tokens:
        return 0.0
    return min(1.0, sum(len(token) for token in tokens) / len(text))
