"""
Input generators for quicksort / quickselect benchmarks and tests.

Distributions (spec["dist"]):
- "random":       integers uniform over params["range"] = [lo, hi] (inclusive).
- "random_float": floats uniform over params["range"] = [lo, hi) (default [0.0, 1.0)).
- "sorted":       [0, 1, ..., n-1].
- "reversed":     [n-1, ..., 0].
- "few_uniques":  n draws from params["k"] distinct integers (range optional,
                  default [0, 2**31 - 1]); heavy duplication stresses the
                  equal-to-pivot scans.
- "organ_pipe":   ascending then descending, [0, 1, ..., m, ..., 1, 0];
                  a classic median-of-three adversary.
- "all_equal":    n copies of params.get("value", 0).

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list

Conventions:
- Always returns a Python list; callers wrap it in NumPy themselves if needed.
- Deterministic distributions ignore `rng`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "random_float",
    "sorted",
    "reversed",
    "few_uniques",
    "organ_pipe",
    "all_equal",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[Any]:
    """
    Generate a list of `n` elements following `spec`.

    Parameters
    ----------
    n : int
        Number of elements; must be >= 0.
    spec : dict
        {"dist": <name>, "params": {...}} as described in the module docstring.
    rng : numpy.random.Generator
        Caller-owned, seeded generator.

    Raises
    ------
    ValueError
        On a negative/non-int n, a malformed spec or an unsupported dist.
    """
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )
    params = spec.get("params", None) or {}
    n = int(n)

    if dist == "random":
        lo, hi = _int_range(params, required=True, default=(0, 0))
        return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()

    if dist == "random_float":
        lo, hi = _float_range(params, default=(0.0, 1.0))
        return rng.uniform(lo, hi, size=n).tolist()

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "few_uniques":
        k = params.get("k", None)
        if not isinstance(k, int) or isinstance(k, bool) or k < 1:
            raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
        lo, hi = _int_range(params, required=False, default=(0, 2**31 - 1))
        if n == 0:
            return []
        actual_k = int(min(k, n, hi - lo + 1))
        pool = _distinct_ints(actual_k, lo, hi, rng)
        picks = rng.integers(0, actual_k, size=n)
        return [pool[int(t)] for t in picks]

    if dist == "organ_pipe":
        up = (n + 1) // 2
        return list(range(up)) + list(range(n - up - 1, -1, -1))

    if dist == "all_equal":
        return [params.get("value", 0)] * n

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _int_range(
    params: Dict[str, Any], *, required: bool, default: Tuple[int, int]
) -> Tuple[int, int]:
    if "range" not in params:
        if required:
            raise ValueError("params.range must be provided as [min, max] (inclusive)")
        return default
    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    if not all(isinstance(v, (int, np.integer)) for v in spec):
        raise ValueError("params.range values must be integers")
    lo, hi = int(spec[0]), int(spec[1])
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _float_range(params: Dict[str, Any], default: Tuple[float, float]) -> Tuple[float, float]:
    spec = params.get("range", default)
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [low, high]")
    try:
        lo, hi = float(spec[0]), float(spec[1])
    except (TypeError, ValueError) as e:
        raise ValueError(f"params.range values must be numbers; got {spec!r}") from e
    if lo > hi:
        raise ValueError(f"params.range invalid: low > high ({lo} > {hi})")
    return lo, hi


def _distinct_ints(k: int, lo: int, hi: int, rng: np.random.Generator) -> List[int]:
    # Oversampled batches drawn from `rng` keep the pool reproducible per seed
    chosen: List[int] = []
    seen = set()
    while len(chosen) < k:
        batch = rng.integers(lo, hi + 1, size=2 * (k - len(chosen)))
        for v in map(int, batch):
            if v not in seen:
                seen.add(v)
                chosen.append(v)
                if len(chosen) == k:
                    break
    return chosen
