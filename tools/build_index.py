# tools/build_index.py
"""
Build-time step: encode the emoji dictionary into the index blob that ships
with the package.
Usage:
  python tools/build_index.py                      # packaged dictionary -> packaged blob
  python tools/build_index.py --dictionary my.json --out my.raw
"""
import argparse

from emoji_picker.utils.index_store import DICTIONARY_PATH, INDEX_PATH, build_index_file
from emoji_picker.utils.logger_utils import setup_logging


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--dictionary", default=DICTIONARY_PATH, help="JSON list of [name, value] pairs")
    parser.add_argument("--out", default=INDEX_PATH, help="where to write the encoded index")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)
    index = build_index_file(args.dictionary, args.out)
    print(f"{len(index)} entries, depth {index.depth()} -> {args.out}")


if __name__ == "__main__":
    main()
