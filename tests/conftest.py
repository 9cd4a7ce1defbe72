import pytest

from emb_to_words.vectors import EmbeddingTable

SAMPLE = """\
cat 0.0 1.0
dog 1.0 0.0
kitten 0.0 0.9
puppy 0.9 0.1
"""


@pytest.fixture
def write_vectors(tmp_path):
    """Write `text` to a vectors file under tmp_path and return its path."""
    def _write(text, name="vectors.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_file(write_vectors):
    return write_vectors(SAMPLE)


@pytest.fixture
def pets():
    return EmbeddingTable.from_dict({
        "cat": [0.0, 1.0],
        "dog": [1.0, 0.0],
        "kitten": [0.0, 0.9],
    })
