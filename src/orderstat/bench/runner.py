"""
Experiment runner: times sort / sort_with_indices / select / median over a
sweep of input sizes described by a YAML config.

Usage (from repo root):
    python -m orderstat.bench.runner experiments/configs/quicksort_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample or failure record
    - summary.csv             # median + IQR per (op, n)

Design notes:
- For each size n, ONE dataset is generated and every operation gets a copy.
- Before timing, each operation's output on that dataset is checked once
  against the oracle; a wrong answer is recorded as status "invalid".
- On timeout/error/invalid for an operation at size n, larger sizes are
  skipped for that operation.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from orderstat.algorithms import median, select, sort, sort_with_indices
from orderstat.bench.measure import time_operation_call
from orderstat.datasets import make_dataset
from orderstat.validate import (
    ORACLE_NAME,
    equals_oracle,
    indices_trace_matches,
    is_nondecreasing,
    oracle_median,
    oracle_select,
    select_partition_holds,
)

logger = logging.getLogger(__name__)
_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "operations",
]

SUMMARY_COLUMNS = ["op", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- operations ------------------------- #

OpFactory = Callable[[int, Dict[str, Any]], Callable[[List[Any]], Any]]


@dataclass(frozen=True)
class OpSpec:
    name: str
    factory: OpFactory
    config: Dict[str, Any]


def _select_k(n: int, config: Dict[str, Any]) -> int:
    if "k" in config:
        k = int(config["k"])
    else:
        k = int(float(config.get("k_frac", 0.5)) * max(n - 1, 0))
    return min(max(k, 0), max(n - 1, 0))


def _sort_factory(n: int, config: Dict[str, Any]) -> Callable[[List[Any]], Any]:
    return lambda a: sort(a)


def _sort_with_indices_factory(n: int, config: Dict[str, Any]) -> Callable[[List[Any]], Any]:
    return lambda a: sort_with_indices(a)


def _select_factory(n: int, config: Dict[str, Any]) -> Callable[[List[Any]], Any]:
    k = _select_k(n, config)
    return lambda a: select(k, a)


def _median_factory(n: int, config: Dict[str, Any]) -> Callable[[List[Any]], Any]:
    return lambda a: median(a)


OPERATIONS: Dict[str, OpFactory] = {
    "sort": _sort_factory,
    "sort_with_indices": _sort_with_indices_factory,
    "select": _select_factory,
    "median": _median_factory,
}


def _resolve_operations(cfg_ops: List[Dict[str, Any]]) -> List[OpSpec]:
    specs: List[OpSpec] = []
    seen = set()
    for entry in cfg_ops:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each operation must have a string 'name' field")
        if name not in OPERATIONS:
            raise ValueError(f"Unknown operation {name!r}. Supported: {sorted(OPERATIONS)}")
        if name in seen:
            raise ValueError(f"Duplicate operation name in config: {name}")
        seen.add(name)

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Operation '{name}': 'config' must be a dict if provided")

        specs.append(OpSpec(name=name, factory=OPERATIONS[name], config=config))
    return specs


def _check_once(spec: OpSpec, base_a: List[Any]) -> Optional[str]:
    """Run the operation once on a copy and return a failure description, or None."""
    n = len(base_a)
    a = list(base_a)
    if spec.name == "sort":
        sort(a)
        if not equals_oracle(base_a, a):
            return f"sort output does not match {ORACLE_NAME}"
    elif spec.name == "sort_with_indices":
        idx = sort_with_indices(a)
        if not is_nondecreasing(a) or not indices_trace_matches(base_a, a, idx):
            return "sort_with_indices output or index trace is wrong"
    elif spec.name == "select":
        k = _select_k(n, spec.config)
        got = select(k, a)
        if got != oracle_select(k, base_a) or not select_partition_holds(a, k):
            return f"select(k={k}) returned {got!r}, expected {oracle_select(k, base_a)!r}"
    elif spec.name == "median":
        got = median(a)
        expected = oracle_median(base_a)
        if got != expected:
            return f"median returned {got!r}, expected {expected!r}"
    return None


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "oracle": ORACLE_NAME,
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load and validate an experiment config; raises ValueError on bad input."""
    cfg = _load_yaml(config_path)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {config_path} must be a YAML mapping")
    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")
    sizes = cfg["sizes"]
    if not isinstance(sizes, list) or not sizes or not all(isinstance(n, int) and n >= 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    if not isinstance(cfg["operations"], list) or not cfg["operations"]:
        raise ValueError("Config 'operations' must be a non-empty list")
    return cfg


# ------------------------- summary ------------------------- #

def aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    """Median, IQR, min and max of time_ns per (op, n) over successful samples."""
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = (
        df.groupby(["op", "n"], as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            q1_ns=("time_ns", lambda s: s.quantile(0.25)),
            q3_ns=("time_ns", lambda s: s.quantile(0.75)),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    out["iqr_ns"] = out["q3_ns"] - out["q1_ns"]
    out = out[SUMMARY_COLUMNS].copy()
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[
        ["median_ns", "iqr_ns", "min_ns", "max_ns"]
    ].astype("int64")
    return out.sort_values(["op", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Operation", style="bold")
    picks: List[Tuple[str, int]] = []
    first, mid, last = sizes[0], sizes[len(sizes) // 2], sizes[-1]
    for npick in dict.fromkeys([first, mid, last]):
        picks.append((f"n={npick}", npick))
        table.add_column(f"n={npick}", justify="right")

    for op in summary["op"].unique():
        row = [f"[bold]{op}[/]"]
        for _, npick in picks:
            s = summary[(summary["op"] == op) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                med_ms = int(s["median_ns"].values[0]) / 1e6
                iqr_ms = int(s["iqr_ns"].values[0]) / 1e6
                row.append(f"{med_ms:.2f} ± {iqr_ms:.2f}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = load_config(config_path)

    experiment_name = str(cfg["experiment_name"])
    sizes: List[int] = list(cfg["sizes"])
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    ops = _resolve_operations(list(cfg["operations"]))

    run_dir = _ensure_run_dir(Path(cfg["output_dir"]), experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    skipped = {o.name: False for o in ops}

    _console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    _console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    _console.print(f"[bold]Operations:[/bold] {', '.join(o.name for o in ops)}")
    _console.print()

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(int(n), dataset_spec, rng)

        for spec in ops:
            if skipped[spec.name]:
                continue
            if n == 0 and spec.name in ("select", "median"):
                logger.debug("%s is undefined on an empty input; skipping n=0", spec.name)
                continue

            try:
                problem = _check_once(spec, base_a)
            except Exception as e:
                logger.exception("Validation run of %s failed at n=%d", spec.name, n)
                problem = f"validation run raised {e!r}"
            if problem is not None:
                logger.error("%s invalid at n=%d: %s", spec.name, n, problem)
                skipped[spec.name] = True
                _append_jsonl(
                    {"op": spec.name, "n": int(n), "status": "invalid", "error": problem, "config": spec.config},
                    results_path,
                )
                continue

            res = time_operation_call(
                op_name=spec.name,
                op_fn=spec.factory(int(n), spec.config),
                a=base_a,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "op": spec.name,
                        "n": int(n),
                        "dataset": dataset_spec,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                        "config": spec.config,
                    },
                    results_path,
                )

            status = res["status"]
            if status == "timeout":
                logger.warning("%s timed out at n=%d; skipping larger sizes", spec.name, n)
                skipped[spec.name] = True
                _append_jsonl(
                    {
                        "op": spec.name,
                        "n": int(n),
                        "status": "timeout",
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "timed_out_ns": res["timed_out_ns"],
                        "config": spec.config,
                    },
                    results_path,
                )
            elif status == "error":
                logger.error("%s failed at n=%d: %s", spec.name, n, res["error"])
                skipped[spec.name] = True
                _append_jsonl(
                    {"op": spec.name, "n": int(n), "status": "error", "error": res["error"], "config": spec.config},
                    results_path,
                )

    summary_df = aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    _print_rich_summary(summary_df, sizes)

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {p}")
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run an order-statistics benchmark from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
