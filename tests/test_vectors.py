from pathlib import Path

import numpy as np
import pytest

from emb_to_words.errors import DimensionMismatchError, MalformedLineError, UnknownWordError
from emb_to_words.vectors import EmbeddingTable, load_embeddings


def test_load_keeps_file_order_and_dim(sample_file):
    table = load_embeddings(sample_file)
    assert table.words == ["cat", "dog", "kitten", "puppy"]
    assert len(table) == 4
    assert table.dim == 2
    assert table["puppy"].dtype == np.float64
    np.testing.assert_array_equal(table["kitten"], [0.0, 0.9])


def test_loading_twice_gives_same_lookups(sample_file):
    a = load_embeddings(sample_file)
    b = load_embeddings(sample_file)
    assert a.words == b.words
    for word in a:
        np.testing.assert_array_equal(a[word], b[word])


def test_blank_lines_and_extra_whitespace(write_vectors):
    path = write_vectors("\n  a   1.0\t2.0  \n\n   \nb 3 4\n")
    table = load_embeddings(path)
    assert table.words == ["a", "b"]
    np.testing.assert_array_equal(table["a"], [1.0, 2.0])


def test_first_occurrence_wins(write_vectors):
    table = load_embeddings(write_vectors("a 1 1\nb 2 2\na 9 9\n"))
    assert table.words == ["a", "b"]
    np.testing.assert_array_equal(table["a"], [1.0, 1.0])


def test_words_are_case_sensitive(write_vectors):
    table = load_embeddings(write_vectors("Apple 1 0\napple 0 1\n"))
    assert "Apple" in table and "apple" in table
    assert "APPLE" not in table


def test_non_numeric_value_names_line(write_vectors):
    path = write_vectors("a 1 2\n\nb 3 oops\n")
    with pytest.raises(MalformedLineError) as exc:
        load_embeddings(path)
    assert exc.value.line_number == 3
    assert "oops" in str(exc.value)


def test_non_finite_value_is_rejected(write_vectors):
    with pytest.raises(MalformedLineError):
        load_embeddings(write_vectors("a 1 nan\n"))


def test_word_without_values(write_vectors):
    with pytest.raises(MalformedLineError) as exc:
        load_embeddings(write_vectors("a 1 2\nlonely\n"))
    assert exc.value.line_number == 2


def test_dimension_mismatch(write_vectors):
    path = write_vectors("a 1 2 3\nb 1 2\n")
    with pytest.raises(DimensionMismatchError) as exc:
        load_embeddings(path)
    err = exc.value
    assert (err.line_number, err.expected, err.actual) == (2, 3, 2)
    assert isinstance(err, MalformedLineError)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_embeddings(tmp_path / "nope.txt")


def test_empty_file_gives_empty_table(write_vectors):
    table = load_embeddings(write_vectors("\n\n"))
    assert len(table) == 0
    assert table.dim == 0


def test_progress_bar_does_not_touch_stdout(sample_file, capsys):
    table = load_embeddings(sample_file, progress=True)
    assert len(table) == 4
    assert capsys.readouterr().out == ""


def test_table_is_read_only(pets):
    with pytest.raises(ValueError):
        pets["cat"][0] = 5.0


def test_unknown_lookup(pets):
    with pytest.raises(UnknownWordError) as exc:
        pets["horse"]
    assert exc.value.word == "horse"
    assert "horse" in str(exc.value)


def test_items_in_insertion_order(pets):
    assert [w for w, _ in pets.items()] == ["cat", "dog", "kitten"]


def test_invalid_utf8_names_line(tmp_path):
    path = tmp_path / "vectors.txt"
    path.write_bytes(b"cat 0 1\n\xff\xfe 1 0\n")
    with pytest.raises(MalformedLineError) as exc:
        load_embeddings(path)
    assert exc.value.line_number == 2
    assert "UTF-8" in str(exc.value)


def test_non_ascii_words(write_vectors):
    table = load_embeddings(write_vectors("café 1 0\nnaïve 0 1\n"))
    assert table.words == ["café", "naïve"]


def _track_open(monkeypatch):
    opened = []
    real_open = Path.open

    def tracking_open(self, *args, **kwargs):
        f = real_open(self, *args, **kwargs)
        opened.append(f)
        return f

    monkeypatch.setattr(Path, "open", tracking_open)
    return opened


def test_file_closed_after_load(sample_file, monkeypatch):
    opened = _track_open(monkeypatch)
    load_embeddings(sample_file)
    assert len(opened) == 1
    assert opened[0].closed


def test_file_closed_after_malformed_line(write_vectors, monkeypatch):
    path = write_vectors("a 1 2\nb 1 x\n")
    opened = _track_open(monkeypatch)
    with pytest.raises(MalformedLineError):
        load_embeddings(path)
    assert len(opened) == 1
    assert opened[0].closed
