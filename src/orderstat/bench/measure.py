"""
Timing harness for in-place operations.

Every operation here mutates its input, so each sample gets a fresh copy of
the base input, made outside the timed block. GC control and warm-up also
stay outside the timed region.

Public API (stable):
    time_operation_call(... ) -> dict

Returned dict schema:
    {
        "op": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
        "timed_out_ns": int | None,         # elapsed ns of that repeat; not in samples_ns
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List, Sequence

logger = logging.getLogger(__name__)

__all__ = ["time_operation_call"]


def time_operation_call(
    *,
    op_name: str,
    op_fn: Callable[[List[Any]], Any],
    a: Sequence[Any],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated calls to `op_fn(list(a))`.

    Parameters
    ----------
    op_name : str
        Logical operation name (for records).
    op_fn : Callable[[list], Any]
        Operation under test; may mutate its argument.
    a : sequence
        Base input; never passed to `op_fn` directly.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call first.
    disable_gc : bool
        If True, collect and disable the GC during the timed loop; restored afterward.
    timeout_seconds : float
        Per-sample threshold; the first slower sample sets status="timeout",
        is reported in "timed_out_ns" instead of "samples_ns", and stops sampling.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "op": op_name,
        "repeats": repeats,
        "samples_ns": [],  # type: List[int]
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
        "timed_out_ns": None,
    }

    if warmup and repeats > 0:
        try:
            op_fn(list(a))
        except Exception as e:
            logger.debug("Warmup of %s failed", op_name, exc_info=True)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a)
            try:
                t0 = time.perf_counter_ns()
                op_fn(arg)
                t1 = time.perf_counter_ns()
            except Exception as e:
                logger.debug("%s failed at repeat %d", op_name, r, exc_info=True)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            if elapsed > threshold_ns:
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                result["timed_out_ns"] = int(elapsed)
                break
            result["samples_ns"].append(int(elapsed))
    finally:
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
