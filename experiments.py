"""
Huffman tree experiments: code quality and decode speed on synthetic text

Runs repeated build/encode/decode passes over generated datasets

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --sizes 1024,16384,262144
  python experiments.py --outdir results --generators uniform26,zipf26,english_like --no_plots
"""

from __future__ import annotations

import argparse
import csv
import math
import random
import statistics
import string
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

import huffman as huff


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def freq_table(text: str) -> Dict[str, int]:
    ft: Dict[str, int] = {}
    for ch in text:
        ft[ch] = ft.get(ch, 0) + 1
    return ft

def shannon_entropy(ft: Dict[str, int]) -> float:
    total = sum(ft.values())
    if total == 0:
        return 0.0
    return -sum((f / total) * math.log2(f / total) for f in ft.values() if f > 0)

def average_code_length(ft: Dict[str, int], code_map: Dict[str, str]) -> float:
    """
    Expected bits per symbol under the frequency table
    """
    total = sum(ft.values())
    if total == 0:
        return 0.0
    return sum(f * len(code_map[ch]) for ch, f in ft.items()) / total


# Synthetic dataset generators

ALPHABET = string.ascii_lowercase

def _sample_from_weights(rng: random.Random, chars: str, weights: List[float], size: int) -> str:
    total = sum(weights)
    cdf = []
    acc = 0.0
    for w in weights:
        acc += w / total
        cdf.append(acc)

    out = []
    for _ in range(size):
        r = rng.random()
        lo, hi = 0, len(cdf) - 1
        while lo < hi:
            mid = (lo + hi) // 2
            if r <= cdf[mid]:
                hi = mid
            else:
                lo = mid + 1
        out.append(chars[lo])
    return "".join(out)

def gen_uniform(size: int, alphabet: int = 26, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = ALPHABET[:alphabet]
    return "".join(rng.choice(chars) for _ in range(size))

def gen_repetitive(size: int, dominant: str = 'a', dom_frac: float = 0.90, seed: int = 0) -> str:
    rng = random.Random(seed)
    other_symbols = [ch for ch in ALPHABET if ch != dominant]
    out = []
    for _ in range(size):
        if rng.random() < dom_frac:
            out.append(dominant)
        else:
            out.append(rng.choice(other_symbols))
    return "".join(out)

def gen_zipf_like(size: int, alphabet: int = 26, s: float = 1.2, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = ALPHABET[:alphabet]
    weights = [1.0 / ((i + 1) ** s) for i in range(len(chars))]
    return _sample_from_weights(rng, chars, weights, size)

def gen_english_like(size: int, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = " etaoinshrdlcumwfgypbvkjxq\n"
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch in "etaoinshrdlu":
            weights.append(6.0)
        elif ch in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return _sample_from_weights(rng, chars, weights, size)

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], str]] = {
    "uniform26": lambda size, seed: gen_uniform(size, alphabet=26, seed=seed),
    "uniform8": lambda size, seed: gen_uniform(size, alphabet=8, seed=seed),
    "zipf26": lambda size, seed: gen_zipf_like(size, alphabet=26, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant='a', dom_frac=0.90, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size: int, seed: int) -> str:
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"unknown generator {name!r} (choose from {', '.join(sorted(GENERATOR_REGISTRY))})")
    return fn(size, seed)


# Experiment runner

@dataclass
class MetricRow:
    dataset_name: str
    text_length: int
    run_id: int
    unique_symbols: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    avg_code_length: float
    entropy: float
    efficiency: float  # entropy / avg_code_length
    correctness_ok: int  # 1 or 0


def run_one(text: str) -> MetricRow:
    ft = freq_table(text)
    entropy = shannon_entropy(ft)

    t0 = now_ns()
    tree = huff.build_from_frequencies(ft)
    t1 = now_ns()
    build_ms = ns_to_ms(t1 - t0)

    if len(ft) < 2:
        # Zero or one distinct symbol -> no codes to exercise, decode would be rejected
        return MetricRow(
            dataset_name="",
            text_length=len(text),
            run_id=0,
            unique_symbols=len(ft),
            build_ms=build_ms,
            encode_ms=0.0,
            decode_ms=0.0,
            total_ms=build_ms,
            encoded_bits=0,
            avg_code_length=0.0,
            entropy=entropy,
            efficiency=1.0,
            correctness_ok=1,
        )

    t2 = now_ns()
    bits = tree.encode(text)
    t3 = now_ns()
    encode_ms = ns_to_ms(t3 - t2)

    t4 = now_ns()
    decoded = tree.decode(bits)
    t5 = now_ns()
    decode_ms = ns_to_ms(t5 - t4)

    avg_len = average_code_length(ft, tree.codes())
    return MetricRow(
        dataset_name="",
        text_length=len(text),
        run_id=0,
        unique_symbols=len(ft),
        build_ms=build_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_ms + encode_ms + decode_ms,
        encoded_bits=len(bits),
        avg_code_length=avg_len,
        entropy=entropy,
        efficiency=(entropy / avg_len) if avg_len > 0 else 1.0,
        correctness_ok=1 if "".join(decoded) == text else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by dataset_name, text_length and compute mean/stdev
    """
    key_to: Dict[Tuple[str, int], List[MetricRow]] = {}
    for r in rows:
        key_to.setdefault((r.dataset_name, r.text_length), []).append(r)

    summary_fields = [
        "dataset_name", "text_length", "n_runs",
        "avg_code_length_mean", "entropy_mean", "efficiency_mean",
        "build_ms_mean", "build_ms_stdev",
        "encode_ms_mean", "encode_ms_stdev",
        "decode_ms_mean", "decode_ms_stdev",
        "total_ms_mean", "total_ms_stdev",
        "correctness_ok_rate",
    ]
    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for (dataset_name, length), items in sorted(key_to.items()):
            bu_m, bu_s = mean_stdev([x.build_ms for x in items])
            en_m, en_s = mean_stdev([x.encode_ms for x in items])
            de_m, de_s = mean_stdev([x.decode_ms for x in items])
            tt_m, tt_s = mean_stdev([x.total_ms for x in items])

            w.writerow({
                "dataset_name": dataset_name,
                "text_length": length,
                "n_runs": len(items),
                "avg_code_length_mean": statistics.mean(x.avg_code_length for x in items),
                "entropy_mean": statistics.mean(x.entropy for x in items),
                "efficiency_mean": statistics.mean(x.efficiency for x in items),
                "build_ms_mean": bu_m,
                "build_ms_stdev": bu_s,
                "encode_ms_mean": en_m,
                "encode_ms_stdev": en_s,
                "decode_ms_mean": de_m,
                "decode_ms_stdev": de_s,
                "total_ms_mean": tt_m,
                "total_ms_stdev": tt_s,
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            })


# Plotting

def plot_code_length(rows: List[MetricRow], outdir: Path) -> None:
    if not rows:
        return

    datasets = sorted(set(r.dataset_name for r in rows))
    x = list(range(len(datasets)))

    def mean_for(dataset: str, field: str) -> float:
        vals = [getattr(r, field) for r in rows if r.dataset_name == dataset]
        return statistics.mean(vals) if vals else float("nan")

    plt.figure()
    plt.plot(x, [mean_for(d, "avg_code_length") for d in datasets], marker="o", label="huffman")
    plt.plot(x, [mean_for(d, "entropy") for d in datasets], marker="x", linestyle="--", label="entropy")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Average Code Length vs Entropy by Distribution")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "code_length.png", dpi=200)
    plt.close()


def plot_decode_scaling(rows: List[MetricRow], outdir: Path) -> None:
    if not rows:
        return

    datasets = sorted(set(r.dataset_name for r in rows))

    plt.figure()
    for dataset in datasets:
        ds_rows = [r for r in rows if r.dataset_name == dataset]
        lengths = sorted(set(r.text_length for r in ds_rows))
        y = [statistics.mean(r.decode_ms for r in ds_rows if r.text_length == n) for n in lengths]
        plt.plot(lengths, y, marker="o", label=dataset)
    plt.xlabel("Text Length (symbols)")
    plt.ylabel("Decode Time (ms)")
    plt.title("Decode Time vs Text Length")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outdir / "decode_time.png", dpi=200)
    plt.close()


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def run_experiments(gen_names: List[str], sizes: List[int], runs: int, seed: int) -> List[MetricRow]:
    rows: List[MetricRow] = []
    for gen_name in gen_names:
        for size in sizes:
            for run_id in range(1, runs + 1):
                text = generate_dataset(gen_name, size, seed + size + run_id)
                row = run_one(text)
                row.dataset_name = gen_name
                row.run_id = run_id
                rows.append(row)
    return rows

def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--sizes", type=str, default="1024,8192,65536",
                    help="Comma-separated text lengths (in symbols)")
    ap.add_argument("--generators", type=str, default="uniform26,zipf26,repetitive90,english_like",
                    help="Comma-separated dataset generator names")
    ap.add_argument("--no_plots", action="store_true", help="Skip writing charts")

    args = ap.parse_args(argv)

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    sizes = [max(1, int(s)) for s in parse_csv_list(args.sizes)]
    rows = run_experiments(parse_csv_list(args.generators), sizes, max(1, args.runs), args.seed)

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_code_length(rows, outdir)
        plot_decode_scaling(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
