"""Nearest-word lookup over GloVe-style text embeddings."""
from emb_to_words.errors import (
    DimensionMismatchError,
    EmbeddingError,
    EmptyQueryError,
    EmptyTableError,
    MalformedLineError,
    UnknownWordError,
)
from emb_to_words.search import (
    Neighbor,
    SearchConfig,
    combine_vectors,
    cosine_similarity,
    euclidean_distance,
    nearest_neighbor,
    nearest_neighbors,
    query_words,
    sum_vectors,
)
from emb_to_words.vectors import EmbeddingTable, load_embeddings

__version__ = "0.1.0"
