# tests/conftest.py
import pytest

from emoji_picker.core.bktree import BKTree
from emoji_picker.core.pair import Dictionary, Entry
from emoji_picker.utils.index_store import load_dictionary

SMALL_PAIRS = [("crab", "🦀"), ("snake", "🐍"), ("coffee", "☕")]


@pytest.fixture
def small_dict():
    return Dictionary.from_pairs(SMALL_PAIRS)


@pytest.fixture
def small_index(small_dict):
    return BKTree.build(small_dict)


@pytest.fixture(scope="session")
def emoji_dict():
    return load_dictionary()


@pytest.fixture(scope="session")
def emoji_index(emoji_dict):
    return BKTree.build(emoji_dict)


@pytest.fixture
def crab():
    return Entry("crab", "🦀")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Never read the developer's real config file."""
    monkeypatch.setenv("EMOJI_PICKER_CONFIG", str(tmp_path / "config.json"))
