"""
search.py
---------
Vector arithmetic and nearest-neighbor lookup over an EmbeddingTable.
Contains:
  - SearchConfig dataclass (exclusion policy, metric, top-k, averaging)
  - cosine_similarity / euclidean_distance
  - sum_vectors, combine_vectors ("king - man + woman"), query_words
  - nearest_neighbor / nearest_neighbors: exhaustive linear scan

The scan visits rows in table order and only replaces the current best on a
strictly better score, so ties go to the word that appears first in the file.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence

import numpy as np

from emb_to_words.errors import EmptyQueryError, EmptyTableError
from emb_to_words.vectors import DTYPE, EmbeddingTable

OPERATORS = {"+": 1.0, "-": -1.0}

# metric -> label used when printing scores
METRICS = {
    "cosine": "similarity",
    "euclidean": "distance",
}


# ---------------------------
# Configuration
# ---------------------------
@dataclass
class SearchConfig:
    """Options for a single query.

    exclude_query_words keeps the input words themselves out of the results,
    otherwise a one-word query would usually just return itself.
    """
    exclude_query_words: bool = True
    metric: str = "cosine"       # "cosine" (higher is better) or "euclidean" (lower is better)
    top: int = 1
    average: bool = False        # mean of the query vectors instead of the sum

    def __post_init__(self):
        if self.metric not in METRICS:
            raise ValueError(f"Unknown metric: {self.metric}")
        if self.top < 1:
            raise ValueError(f"top must be >= 1, got {self.top}")


class Neighbor(NamedTuple):
    word: str
    score: float


# ---------------------------
# Similarity measures
# ---------------------------
def cosine_similarity(vec1, vec2) -> float:
    """dot(a, b) / (|a| * |b|), or 0.0 when either vector has zero length.

    Both vectors are divided by their largest component first so the dot
    products cannot overflow; the angle is unchanged.
    """
    vec1 = np.asarray(vec1, dtype=DTYPE)
    vec2 = np.asarray(vec2, dtype=DTYPE)
    scale1 = np.max(np.abs(vec1)) if vec1.size else 0.0
    scale2 = np.max(np.abs(vec2)) if vec2.size else 0.0
    if scale1 == 0 or scale2 == 0:
        return 0.0
    with np.errstate(invalid="ignore", over="ignore"):
        a = vec1 / scale1
        b = vec2 / scale2
        sim = np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b))
    # only reachable with inf components, e.g. a query sum that overflowed
    if not np.isfinite(sim):
        return 0.0
    return float(np.clip(sim, -1.0, 1.0))


def euclidean_distance(vec1, vec2) -> float:
    return float(np.linalg.norm(np.asarray(vec1, dtype=DTYPE) - np.asarray(vec2, dtype=DTYPE)))


def _score_fn(metric: str):
    return cosine_similarity if metric == "cosine" else euclidean_distance


def _is_better(metric: str, score: float, best: float) -> bool:
    return score > best if metric == "cosine" else score < best


# ---------------------------
# Vector arithmetic
# ---------------------------
def query_words(tokens: Iterable[str]) -> List[str]:
    """The words of an expression, without the +/- operators."""
    return [t for t in tokens if t not in OPERATORS]


def combine_vectors(table: EmbeddingTable, tokens: Sequence[str], average: bool = False) -> np.ndarray:
    """Evaluate an expression like ["king", "-", "man", "+", "woman"].

    An operator applies to every word after it until the next operator;
    words before any operator are added. With average=True the signed sum is
    divided by the number of words.

    Raises:
        UnknownWordError for the first word missing from the table.
        EmptyQueryError if the expression contains no words.
    """
    if not query_words(tokens):
        raise EmptyQueryError()

    sign = 1.0
    count = 0
    total = np.zeros(table.dim, dtype=DTYPE)
    for tok in tokens:
        if tok in OPERATORS:
            sign = OPERATORS[tok]
            continue
        total += sign * table[tok]
        count += 1

    if average:
        total /= count
    return total


def sum_vectors(table: EmbeddingTable, words: Sequence[str]) -> np.ndarray:
    """Element-wise sum of the vectors for `words`."""
    if not words:
        raise EmptyQueryError()
    total = np.zeros(table.dim, dtype=DTYPE)
    for word in words:
        total += table[word]
    return total


# ---------------------------
# Search
# ---------------------------
def _check_query(table: EmbeddingTable, query) -> np.ndarray:
    if len(table) == 0:
        raise EmptyTableError()
    query = np.asarray(query, dtype=DTYPE)
    if query.shape != (table.dim,):
        raise ValueError(f"query has shape {query.shape}, table vectors have dim {table.dim}")
    return query


def nearest_neighbor(
    table: EmbeddingTable,
    query,
    config: Optional[SearchConfig] = None,
    exclude: Iterable[str] = (),
) -> Optional[Neighbor]:
    """Best-scoring word for `query`, or None if every word was excluded.

    `exclude` is only honoured when config.exclude_query_words is set.
    """
    config = config or SearchConfig()
    query = _check_query(table, query)
    banned = set(exclude) if config.exclude_query_words else set()
    score_fn = _score_fn(config.metric)

    best_word = None
    best_score = None
    for word, vec in table.items():
        if word in banned:
            continue
        score = score_fn(query, vec)
        if best_word is None or _is_better(config.metric, score, best_score):
            best_word = word
            best_score = score

    if best_word is None:
        return None
    return Neighbor(best_word, best_score)


def nearest_neighbors(
    table: EmbeddingTable,
    query,
    config: Optional[SearchConfig] = None,
    exclude: Iterable[str] = (),
    top: Optional[int] = None,
) -> List[Neighbor]:
    """Up to `top` (default config.top) neighbors, best first.

    Equal scores keep table order (sorted() is stable).
    """
    config = config or SearchConfig()
    query = _check_query(table, query)
    banned = set(exclude) if config.exclude_query_words else set()
    score_fn = _score_fn(config.metric)
    top = config.top if top is None else top

    scored = [Neighbor(w, score_fn(query, vec)) for w, vec in table.items() if w not in banned]
    if config.metric == "cosine":
        scored.sort(key=lambda n: -n.score)
    else:
        scored.sort(key=lambda n: n.score)
    return scored[:top]
