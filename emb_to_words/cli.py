"""
cli.py -- add up word vectors and report the closest word.
Usage examples:
  emb-to-words sample_vectors.txt grimace shake
  emb-to-words sample_vectors.txt king - man + woman --top 5
  emb-to-words sample_vectors.txt apple apples --average --metric euclidean
  emb-to-words sample_vectors.txt company --include-query-words
  emb-to-words sample_vectors.txt --top 3 -- -lrb- -rrb-
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from emb_to_words.errors import EmbeddingError
from emb_to_words.search import (
    METRICS,
    SearchConfig,
    combine_vectors,
    nearest_neighbors,
    query_words,
)
from emb_to_words.vectors import load_embeddings


def buildParser():
    p = argparse.ArgumentParser(
        prog="emb-to-words",
        description="Sum the vectors of the given words and print the nearest word in the embeddings file",
        epilog="Words that start with '-' (e.g. -lrb-) go after a '--' separator: emb-to-words FILE -- -lrb- paren",
    )
    p.add_argument("file", help="Path to embeddings .txt file (word followed by floats per line)")
    p.add_argument("words", nargs="+", help="Query words; '+' and '-' between words add or subtract")
    p.add_argument("--average", action="store_true", help="Use the mean of the query vectors instead of the sum")
    p.add_argument("--metric", choices=sorted(METRICS), default="cosine")
    p.add_argument("--include-query-words", action="store_true",
                   help="Allow the query words themselves to be returned")
    p.add_argument("--top", type=int, default=1, help="Also list the N best matches")
    p.add_argument("--progress", action="store_true", help="Show a progress bar while loading")
    return p


def configFromArgs(args) -> SearchConfig:
    return SearchConfig(
        exclude_query_words=not args.include_query_words,
        metric=args.metric,
        top=args.top,
        average=args.average,
    )


def run(args) -> int:
    config = configFromArgs(args)
    label = METRICS[config.metric]
    txt_path = Path(args.file)

    print(f"Loading vectors from {txt_path}...")
    table = load_embeddings(txt_path, progress=args.progress)
    print(f"Loaded {len(table)} word vectors (dim {table.dim}).")

    target = combine_vectors(table, args.words, average=config.average)
    results = nearest_neighbors(table, target, config, exclude=query_words(args.words))
    if not results:
        print("No nearest neighbor found.", file=sys.stderr)
        return 1

    best = results[0]
    print(f"Nearest neighbor: {best.word} ({label}: {best.score:.4f})")
    if config.top > 1:
        for rank, (w, s) in enumerate(results, start=1):
            print(f"  {rank}. {w} ({label}: {s:.4f})")
    return 0


def main(argv=None) -> int:
    parser = buildParser()
    args = parser.parse_args(argv)
    if args.top < 1:
        parser.error("--top must be at least 1")

    try:
        return run(args)
    except (EmbeddingError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
