# scripts/bench_view_ops.py
"""
Microbench: NDArray view resolution vs. copying paths.

What it measures
----------------
- Per-op latency of zero-copy view operations (slice, permute, TAD, reshape
  of a contiguous array) next to the copying operations they avoid (reshape
  of a permuted array, dup, transpose).
- Uses warmup iterations (not recorded), then repeats with median/p95.

Notes
-----
- Every timed call goes through the Python layout layer, so small views are
  dominated by descriptor construction, not by buffer traffic.
- `--sanity` checks each op once against the NumPy equivalent.

Example
-------
python -O scripts/bench_view_ops.py --shape 16 32 64 --order c --warmup 20 --repeats 100 --sanity
"""

from __future__ import annotations

import argparse
import math
import statistics
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC_DIR = os.path.join(ROOT_DIR, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


# ----------------------------
# Project imports (ndlayout)
# ----------------------------
def _import_ndlayout():
    from ndlayout.infrastructure.ndarray import NDArrayFactory

    return NDArrayFactory


# ----------------------------
# Stats helpers
# ----------------------------
def _median(xs: Sequence[float]) -> float:
    return statistics.median(xs) if xs else float("nan")


def _p95(xs: Sequence[float]) -> float:
    if not xs:
        return float("nan")
    ys = sorted(xs)
    k = int(math.ceil(0.95 * len(ys))) - 1
    k = max(0, min(k, len(ys) - 1))
    return ys[k]


def _fmt(sec: float) -> str:
    if sec < 1e-3:
        return f"{sec * 1e6:8.1f} µs"
    return f"{sec * 1e3:8.3f} ms"


@dataclass
class OpResult:
    name: str
    kind: str
    med: float
    p95: float


# ----------------------------
# Bench core
# ----------------------------
def _time_op(fn: Callable[[], object], *, warmup: int, repeats: int) -> List[float]:
    for _ in range(warmup):
        fn()

    times: List[float] = []
    for _ in range(repeats):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def _build_ops(a, ref: np.ndarray) -> Dict[str, Tuple[str, Callable[[], object], Callable[[], np.ndarray]]]:
    rank = a.rank
    last = rank - 1
    reversed_axes = tuple(range(rank - 1, -1, -1))
    permuted = a.permute(*reversed_axes)
    flat_len = int(ref.size)

    ops = {
        "slice": ("view", lambda: a.slice(0), lambda: ref[0]),
        "permute": ("view", lambda: a.permute(*reversed_axes), lambda: ref.transpose(reversed_axes)),
        "tad_last": (
            "view",
            lambda: a.tensor_along_dimension(0, last),
            lambda: ref[(0,) * last].reshape(1, -1),
        ),
        "reshape_view": (
            "view",
            lambda: a.reshape(-1, ref.shape[-1]),
            lambda: ref.reshape(-1, ref.shape[-1], order=a.ordering.value.upper()),
        ),
        "reshape_copy": (
            "copy",
            lambda: permuted.reshape(1, flat_len),
            lambda: ref.transpose(reversed_axes).reshape(1, flat_len, order=a.ordering.value.upper()),
        ),
        "dup": ("copy", lambda: a.dup(), lambda: ref),
        "transpose": ("copy", lambda: a.transpose(), lambda: ref.transpose(reversed_axes)),
    }
    return ops


def _sanity_check(out, expected: np.ndarray, name: str) -> None:
    got = out.to_numpy()
    if got.shape != expected.shape and got.size == expected.size:
        got = got.reshape(expected.shape)
    if not np.array_equal(got, expected):
        raise AssertionError(f"[sanity] {name} mismatch")


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--shape",
        nargs="+",
        type=int,
        default=[8, 16, 32],
        help="Array shape, e.g. --shape 8 16 32",
    )
    ap.add_argument("--order", choices=["c", "f"], default="c")
    ap.add_argument("--dtype", choices=["float32", "float64"], default="float64")
    ap.add_argument("--warmup", type=int, default=20)
    ap.add_argument("--repeats", type=int, default=100)
    ap.add_argument(
        "--ops",
        nargs="*",
        default=["slice", "permute", "tad_last", "reshape_view", "reshape_copy", "dup", "transpose"],
    )
    ap.add_argument(
        "--sanity",
        action="store_true",
        help="Compare each op once against NumPy",
    )
    args = ap.parse_args()

    shape = tuple(int(x) for x in args.shape)
    if len(shape) < 2:
        raise SystemExit("Use a shape of rank >= 2.")
    dtype = np.float32 if args.dtype == "float32" else np.float64

    print("=" * 72)
    print(
        f"NDArray view bench | shape={shape} order={args.order} dtype={args.dtype} "
        f"warmup={args.warmup} repeats={args.repeats}"
    )
    print("=" * 72)

    NDArrayFactory = _import_ndlayout()
    ref = np.arange(int(np.prod(shape)), dtype=dtype).reshape(shape)
    a = NDArrayFactory(dtype).from_numpy(ref, args.order)

    ops = _build_ops(a, ref)
    selected = [op for op in args.ops if op in ops]
    if not selected:
        raise SystemExit(f"No valid ops selected. Choose from: {' '.join(ops)}")

    results: List[OpResult] = []
    for name in selected:
        kind, fn, expected = ops[name]
        times = _time_op(fn, warmup=args.warmup, repeats=args.repeats)
        if args.sanity:
            _sanity_check(fn(), expected(), name)
        results.append(OpResult(name=name, kind=kind, med=_median(times), p95=_p95(times)))

    print("\nResults (median / p95):")
    print("-" * 72)
    print(f"{'op':14s} | {'kind':6s} | {'median':>12s} {'p95':>12s}")
    print("-" * 72)
    for r in results:
        print(f"{r.name:14s} | {r.kind:6s} | {_fmt(r.med):>12s} {_fmt(r.p95):>12s}")
    print("-" * 72)
    if args.sanity:
        print("Sanity: PASS (all selected ops)")


if __name__ == "__main__":
    main()
