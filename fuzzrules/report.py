"""
report.py
=========
Plain-text report of a batch of trials.

Per trial: the best rule base and its held-out TSS change.  For the batch: a
per-trial table and a summary with the run parameters, mean complexity and
rule count, initial and evolved TSS, mean improvement with its standard
error, and how often the most common rule base was found.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from collections import Counter
from dataclasses import asdict, dataclass
from scipy.stats import sem
from typing import Dict, List, Sequence

from .config import RunConfig
from .trials import TrialResult


@dataclass
class Summary:
    seed: int
    logic: str
    trials: int
    sets_per_variable: int
    population: int
    generations: int
    alpha: float
    mean_complexity: float
    mean_rules: float
    initial_tss: float
    evolved_tss: float
    improvement: float
    improvement_sem: float
    most_common_frequency: float

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def trial_table(results: Sequence[TrialResult]) -> pd.DataFrame:
    """One row per trial."""
    return pd.DataFrame([{
        "seed"        : r.seed,
        "rules"       : r.rules,
        "complexity"  : r.complexity,
        "fitness"     : r.best_fitness,
        "initial_tss" : r.initial_tss,
        "evolved_tss" : r.evolved_tss,
        "improvement" : r.improvement,
        "generations" : r.generations,
    } for r in results])


def most_common_frequency(results: Sequence[TrialResult]) -> float:
    """Share of trials that ended with the most frequent rule base."""
    if not results:
        return float("nan")
    counts = Counter(r.best.signature() for r in results)
    return counts.most_common(1)[0][1] / len(results)


def summarise(config: RunConfig, results: Sequence[TrialResult]) -> Summary:
    table = trial_table(results)
    improvements = table["improvement"].to_numpy(dtype=float) if len(table) else np.array([])
    return Summary(
        seed=config.seed,
        logic=config.logic,
        trials=len(results),
        sets_per_variable=config.nsets,
        population=config.populations,
        generations=config.steps,
        alpha=config.alpha,
        mean_complexity=float(table["complexity"].mean()) if len(table) else float("nan"),
        mean_rules=float(table["rules"].mean()) if len(table) else float("nan"),
        initial_tss=float(table["initial_tss"].mean()) if len(table) else float("nan"),
        evolved_tss=float(table["evolved_tss"].mean()) if len(table) else float("nan"),
        improvement=float(np.nanmean(improvements)) if np.isfinite(improvements).any() else float("nan"),
        improvement_sem=float(sem(improvements, nan_policy="omit")) if len(improvements) > 1 else float("nan"),
        most_common_frequency=most_common_frequency(results),
    )


def format_trials(results: Sequence[TrialResult]) -> List[str]:
    lines: List[str] = []
    for t, r in enumerate(results):
        lines += ["", f"# Trial {t}", "", "## Best rule base", ""]
        lines += str(r.best).splitlines()
        lines += ["", f"TSS change: {r.initial_tss:.6f} -> {r.evolved_tss:.6f} "
                      f"(improvement: {r.improvement:+.6f})"]
    return lines


def format_report(config: RunConfig, results: Sequence[TrialResult]) -> str:
    s = summarise(config, results)
    bar = "=" * 65
    lines = format_trials(results)
    lines += [
        "",
        bar,
        "Summary",
        bar,
        f"  Seed                         : {s.seed}",
        f"  Logic                        : {s.logic}",
        f"  Trials                       : {s.trials}",
        f"  Fuzzy sets per variable      : {s.sets_per_variable}",
        f"  Population size              : {s.population}",
        f"  Generations                  : {s.generations}",
        f"  Alpha                        : {s.alpha}",
        f"  Mean complexity              : {s.mean_complexity:.2f}",
        f"  Mean rule count              : {s.mean_rules:.2f}",
        f"  Initial TSS                  : {s.initial_tss:.6f}",
        f"  Evolved TSS (mean)           : {s.evolved_tss:.6f}",
        f"  Mean improvement             : {s.improvement:+.6f} ± {s.improvement_sem:.6f} (SEM)",
        f"  Most common solution (freq.) : {s.most_common_frequency:.3f}",
        bar,
        "",
        trial_table(results).to_string(index=False, float_format=lambda v: f"{v:.4f}"),
    ]
    return "\n".join(lines)
