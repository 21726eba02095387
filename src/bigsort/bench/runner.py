"""
Experiment runner: times the presence sort against baselines from a YAML config.

Usage (from repo root):
    bigsort-bench experiments/configs/01_random_scaling.yaml
    python -m bigsort.bench.runner experiments/configs/01_random_scaling.yaml

Config keys (all required):
    experiment_name, output_dir, seed, repeats, warmup, disable_gc,
    timeout_seconds, dataset, sizes, algorithms

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per timing sample or failure
    - summary.csv             # median + IQR per (algo, n), with presence-vector size

Design notes:
- For each size n, ONE dataset is generated and given to every algorithm.
- Every algorithm's first output is checked against `sorted(a)`.
- On timeout/error/invalid output for an algorithm at size n, larger sizes are
  skipped for that algorithm.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import logging
import os
import platform
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from bigsort.bench.measure import time_sort_call
from bigsort.datasets import make_dataset
from bigsort.validate import oracle_sort

logger = logging.getLogger(__name__)

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
    "algorithms",
]

SUMMARY_COLUMNS = [
    "algo",
    "n",
    "presence_vector_size",
    "samples_ok",
    "median_ns",
    "iqr_ns",
    "min_ns",
    "max_ns",
]


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Any
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a YAML mapping")
    return cfg


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
    suffix = 1
    while run_dir.exists():
        run_dir = base_dir / f"{stamp}_{experiment_name}_{suffix}"
        suffix += 1
    run_dir.mkdir(parents=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
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


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        try:
            mod = importlib.import_module(f"bigsort.algorithms.{name}")
        except ImportError as e:
            raise ImportError(
                f"Could not import algorithm module 'bigsort.algorithms.{name}': {e!r}"
            ) from e

        if not callable(getattr(mod, "sort", None)):
            raise AttributeError(
                f"Algorithm module '{name}' must define a callable `sort(a, *, config=None)`"
            )

        config = entry.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, sort_fn=mod.sort, config=config))
    return specs


# ------------------------- aggregation & display ------------------------- #

def _iqr_ns(times: pd.Series) -> int:
    return int(times.quantile(0.75) - times.quantile(0.25))


def aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    """Median/IQR/min/max of successful samples per (algo, n)."""
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    out = (
        df.groupby(["algo", "n"], as_index=False)
        .agg(
            presence_vector_size=("presence_vector_size", "max"),
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            iqr_ns=("time_ns", _iqr_ns),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    int_cols = ["n", "presence_vector_size", "median_ns", "iqr_ns", "min_ns", "max_ns"]
    out[int_cols] = out[int_cols].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def print_summary(summary: pd.DataFrame, console: Console) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")
    table.add_column("n", justify="right")
    table.add_column("presence vector", justify="right")
    table.add_column("median ± IQR", justify="right")
    table.add_column("samples", justify="right")

    if summary.empty:
        console.print("(no samples)")
        return

    for row in summary.itertuples(index=False):
        table.add_row(
            str(row.algo),
            str(row.n),
            str(row.presence_vector_size),
            f"{row.median_ns / 1e6:.3f} ± {row.iqr_ns / 1e6:.3f}",
            str(row.samples_ok),
        )
    console.print()
    console.print(table)
    console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path, console: Optional[Console] = None) -> Path:
    """Run one sweep described by the YAML file at `config_path`; return the run directory."""
    console = console or Console()
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes: List[int] = [int(n) for n in cfg["sizes"]]
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos = _resolve_algorithms(list(cfg["algorithms"]))

    if not sizes or any(n < 1 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of positive integers")
    if not algos:
        raise ValueError("Config 'algorithms' must list at least one algorithm")

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    skipped = {a.name: False for a in algos}

    console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    console.print(f"[bold]Experiment:[/bold] {experiment_name}")
    console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")

    for n in tqdm(sizes, desc="Sizes", unit="n", disable=not console.is_terminal):
        base_a = make_dataset(n, dataset_spec, rng)
        expected = oracle_sort(base_a)
        pv_size = max(base_a)

        for spec in algos:
            if skipped[spec.name]:
                continue

            res = time_sort_call(
                algo_name=spec.name,
                algo_fn=spec.sort_fn,
                a=base_a,
                config=spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
                defensive_copy=True,
                expected=expected,
            )

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": spec.name,
                        "n": n,
                        "presence_vector_size": pv_size,
                        "dataset": dataset_spec,
                        "trial": trial_idx,
                        "time_ns": t_ns,
                        "config": spec.config,
                    },
                    results_path,
                )

            status = res["status"]
            if status != "ok":
                skipped[spec.name] = True
                logger.warning("%s stopped at n=%d: %s (%s)", spec.name, n, status, res["error"])
                _append_jsonl(
                    {
                        "algo": spec.name,
                        "n": n,
                        "status": status,
                        "error": res["error"],
                        "timed_out_on_repeat": res["timed_out_on_repeat"],
                        "config": spec.config,
                    },
                    results_path,
                )

    summary_df = aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)
    print_summary(summary_df, console)

    console.print("[bold green]Done.[/bold green] Wrote:")
    for path in (results_path, summary_path, meta_path, cfg_resolved_path):
        console.print(f" - {path}")
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="bigsort-bench",
        description="Benchmark the presence sort from a YAML experiment config.",
    )
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    console = Console()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    config_path = Path(args.config).resolve()
    if not config_path.exists():
        console.print(f"[bold red]Config file not found:[/bold red] {config_path}")
        return 1
    try:
        run_experiment(config_path, console=console)
    except (ValueError, ImportError, AttributeError) as e:
        console.print(f"[bold red]Runner failed:[/bold red] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
