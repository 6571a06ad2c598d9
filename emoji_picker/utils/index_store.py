# index_store.py - files on disk for the picker

# handles:
# - the dictionary file (JSON list of [name, value] pairs)
# - the encoded index blob (see core/codec.py)
# - choosing the index a run starts with (configured path, packaged blob,
#   or an in-memory build from the packaged dictionary)

import json
import logging
import os
from typing import Optional

from emoji_picker.core.bktree import BKTree
from emoji_picker.core.codec import decode, encode
from emoji_picker.core.errors import IndexLoadFailed
from emoji_picker.core.pair import Dictionary
from emoji_picker.utils.logger_utils import Log

logger = logging.getLogger(__name__)

# Packaged data -------------------
DATA_DIRECTORY = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
DICTIONARY_PATH = os.path.join(DATA_DIRECTORY, "emojis.json")
INDEX_PATH = os.path.join(DATA_DIRECTORY, "emojitree.raw")


# Dictionary ----------------------
def load_dictionary(path: str = DICTIONARY_PATH) -> Dictionary:
    """
    Read a dictionary file.
    Args:
        path: JSON file holding [[name, value], ...]
    Raises:
        OSError if the file cannot be read, ValueError if it is not a list of pairs.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a list of [name, value] pairs")
    pairs = []
    for item in raw:
        if (
            not isinstance(item, (list, tuple))
            or len(item) != 2
            or not all(isinstance(s, str) for s in item)
        ):
            raise ValueError(f"{path}: bad entry {item!r}")
        pairs.append((item[0], item[1]))
    logger.debug("loaded %d entries from %s", len(pairs), path)
    return Dictionary.from_pairs(pairs)


# Index blob ----------------------
def save_index(index: BKTree, path: str) -> int:
    """Encode `index` and write it to `path`. Returns the number of bytes written."""
    blob = encode(index)
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "wb") as f:
        f.write(blob)
    logger.info("wrote index (%d entries, %d bytes) to %s", len(index), len(blob), path)
    return len(blob)


def load_index(path: str) -> BKTree:
    """
    Read and decode an index blob.
    Raises IndexLoadFailed when the file cannot be read and CorruptIndex
    when its contents do not decode.
    """
    try:
        with open(path, "rb") as f:
            blob = f.read()
    except OSError as e:
        raise IndexLoadFailed(path, e.strerror or str(e)) from e
    with Log.time_block(f"decode {os.path.basename(path)}"):
        return decode(blob)


def build_index_file(dictionary_path: str = DICTIONARY_PATH, out_path: str = INDEX_PATH) -> BKTree:
    """Build-time step: dictionary file -> BK-tree -> blob on disk."""
    dictionary = load_dictionary(dictionary_path)
    with Log.time_block("build index"):
        index = BKTree.build(dictionary)
    save_index(index, out_path)
    return index


def default_index(index_path: Optional[str] = None) -> BKTree:
    """
    The index a run starts with.
     - an explicit path must exist and decode (IndexLoadFailed/CorruptIndex otherwise)
     - else the packaged blob, when it has been built
     - else built in memory from the packaged dictionary
    """
    if index_path:
        return load_index(index_path)
    if os.path.exists(INDEX_PATH):
        return load_index(INDEX_PATH)

    logger.debug("no packaged index at %s, building from %s", INDEX_PATH, DICTIONARY_PATH)
    try:
        dictionary = load_dictionary(DICTIONARY_PATH)
    except (OSError, ValueError) as e:
        raise IndexLoadFailed(DICTIONARY_PATH, str(e)) from e
    with Log.time_block("build index"):
        return BKTree.build(dictionary)
