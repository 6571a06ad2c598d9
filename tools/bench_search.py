# tools/bench_search.py
"""
Small profiling harness for the BK-tree.
Usage:
  python tools/bench_search.py --iters 20 --tolerance 5

Times find_exact over every name (shuffled), then find_within against a
brute-force scan for a few sample queries, and prints mean/median latency.
"""
import argparse
import random
import statistics
import time

from emoji_picker.core.bktree import scan_within
from emoji_picker.utils.index_store import default_index

SAMPLE_QUERIES = ["crab", "hart", "coffe", "thumb", "rokcet", "moon", "grinning"]


def timed_ms(fn, *args):
    t0 = time.perf_counter()
    fn(*args)
    return (time.perf_counter() - t0) * 1000.0


def summarize(label, times):
    print("%-22s mean=%.3f median=%.3f max=%.3f (ms, n=%d)" % (
        label,
        statistics.mean(times),
        statistics.median(times),
        max(times),
        len(times),
    ))


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--iters", type=int, default=20, help="measured rounds")
    parser.add_argument("--tolerance", type=int, default=5, help="fuzzy tolerance")
    parser.add_argument("--index", default=None, help="index file (default: packaged)")
    args = parser.parse_args()

    index = default_index(args.index)
    names = [e.name for e in index.entries]
    print(f"{len(index)} entries, tree depth {index.depth()}")

    exact = []
    for _ in range(args.iters):
        random.shuffle(names)
        t0 = time.perf_counter()
        for name in names:
            index.find_exact(name)
        exact.append((time.perf_counter() - t0) * 1000.0 / max(1, len(names)))
    summarize("find_exact (per name)", exact)

    tree, brute = [], []
    for _ in range(args.iters):
        q = random.choice(SAMPLE_QUERIES)
        tree.append(timed_ms(index.find_within, q, args.tolerance))
        brute.append(timed_ms(scan_within, index.entries, q, args.tolerance))
    summarize("find_within", tree)
    summarize("brute-force scan", brute)


if __name__ == "__main__":
    main()
