"""
vectors.py
----------
Reading GloVe-style text files into an in-memory table.
Contains:
  - EmbeddingTable: read-only word -> vector mapping backed by one matrix
  - load_embeddings: parse a "word f1 f2 ... fD" file into an EmbeddingTable

All components are float64. The first occurrence of a word wins; later
duplicates are ignored so the row order is exactly the file order.
"""
from __future__ import annotations

import math
from pathlib import Path
from typing import Iterator, List, Tuple, Union

import numpy as np
from tqdm import tqdm

from emb_to_words.errors import DimensionMismatchError, MalformedLineError, UnknownWordError

DTYPE = np.float64


class EmbeddingTable:
    """Vocabulary list, (N, D) matrix, and a word -> row index."""

    def __init__(self, vocab: List[str], vecs: np.ndarray):
        if vecs.ndim != 2 or vecs.shape[0] != len(vocab):
            raise ValueError(f"expected ({len(vocab)}, D) matrix, got shape {vecs.shape}")
        self.vocab = list(vocab)
        self.vecs = np.array(vecs, dtype=DTYPE)
        self.vecs.setflags(write=False)
        self.index = {w: i for i, w in enumerate(self.vocab)}
        if len(self.index) != len(self.vocab):
            raise ValueError("duplicate words in vocabulary")

    @classmethod
    def from_dict(cls, word_vectors) -> "EmbeddingTable":
        """Build a table from a {word: vector} mapping, keeping its order."""
        vocab = list(word_vectors.keys())
        if not vocab:
            return cls([], np.empty((0, 0), dtype=DTYPE))
        vecs = np.vstack([np.asarray(v, dtype=DTYPE) for v in word_vectors.values()])
        return cls(vocab, vecs)

    @property
    def dim(self) -> int:
        return self.vecs.shape[1] if len(self.vocab) else 0

    @property
    def words(self) -> List[str]:
        return list(self.vocab)

    def __len__(self) -> int:
        return len(self.vocab)

    def __contains__(self, word) -> bool:
        return word in self.index

    def __getitem__(self, word: str) -> np.ndarray:
        if word not in self.index:
            raise UnknownWordError(word)
        return self.vecs[self.index[word]]

    def __iter__(self) -> Iterator[str]:
        return iter(self.vocab)

    def items(self) -> Iterator[Tuple[str, np.ndarray]]:
        for i, w in enumerate(self.vocab):
            yield w, self.vecs[i]

    def __repr__(self) -> str:
        return f"EmbeddingTable(words={len(self)}, dim={self.dim})"


def _parse_line(line_number: int, parts: List[str]) -> np.ndarray:
    values = []
    for tok in parts[1:]:
        try:
            x = float(tok)
        except ValueError:
            raise MalformedLineError(line_number, f"non-numeric value {tok!r}") from None
        if not math.isfinite(x):
            raise MalformedLineError(line_number, f"non-finite value {tok!r}")
        values.append(x)
    return np.array(values, dtype=DTYPE)


def load_embeddings(path: Union[str, Path], progress: bool = False) -> EmbeddingTable:
    """Load a whitespace-delimited vectors file.

    Args:
        path: UTF-8 text file, one "word f1 ... fD" entry per line.
        progress: show a tqdm bar (stderr) while reading.
    Returns:
        EmbeddingTable in file order.
    Raises:
        FileNotFoundError / OSError if the file can't be read,
        MalformedLineError for invalid UTF-8, a word without values or a bad number,
        DimensionMismatchError if a line's width differs from the first line.
    """
    path = Path(path)
    vocab: List[str] = []
    rows: List[np.ndarray] = []
    seen = set()
    dim = None

    # decoded per line so a bad byte is reported with its own line number
    with path.open("rb") as f:
        for line_number, raw in enumerate(tqdm(f, desc="Loading vectors", unit=" lines", disable=not progress), start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise MalformedLineError(line_number, "invalid UTF-8") from None
            parts = line.split()
            if not parts:
                continue
            if len(parts) < 2:
                raise MalformedLineError(line_number, f"word {parts[0]!r} has no vector values")
            if dim is None:
                dim = len(parts) - 1
            elif len(parts) - 1 != dim:
                raise DimensionMismatchError(line_number, dim, len(parts) - 1)
            vec = _parse_line(line_number, parts)
            word = parts[0]
            if word in seen:
                continue
            seen.add(word)
            vocab.append(word)
            rows.append(vec)

    if not rows:
        return EmbeddingTable([], np.empty((0, 0), dtype=DTYPE))
    return EmbeddingTable(vocab, np.vstack(rows))
