#!/usr/bin/env python3
"""Time the zalgo codec on random printable ASCII input."""
from __future__ import annotations

import argparse
import json
import random
import string
import time
from typing import Callable, Dict

from zalgo_codec import ZalgoString, zalgo_decode, zalgo_encode

ALPHABET = string.printable.replace("\t", "").replace("\r", "").replace("\x0b", "").replace("\x0c", "")


def random_text(length: int, rng: random.Random) -> str:
    return "".join(rng.choice(ALPHABET) for _ in range(length))


def time_call(func: Callable[[], object], repeat: int) -> float:
    """Return the best wall-clock time in seconds over ``repeat`` runs."""

    best = float("inf")
    for _ in range(repeat):
        start = time.perf_counter()
        func()
        best = min(best, time.perf_counter() - start)
    return best


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark zalgo encoding and decoding")
    parser.add_argument("--length", type=int, default=10_000, help="Characters per sample (default: 10000)")
    parser.add_argument("--repeat", type=int, default=20, help="Runs per operation (default: 20)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random input")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    rng = random.Random(args.seed)
    text = random_text(args.length, rng)
    encoded = zalgo_encode(text)
    zalgo_string = ZalgoString(text)

    timings: Dict[str, float] = {
        "encode": time_call(lambda: zalgo_encode(text), args.repeat),
        "decode": time_call(lambda: zalgo_decode(encoded), args.repeat),
        "zalgo_string_new": time_call(lambda: ZalgoString(text), args.repeat),
        "zalgo_string_decode": time_call(zalgo_string.decode, args.repeat),
    }
    print(f"Best of {args.repeat} runs over {args.length} characters:")
    print(json.dumps({name: f"{seconds * 1e3:.3f} ms" for name, seconds in timings.items()}, indent=2))


if __name__ == "__main__":
    main()
