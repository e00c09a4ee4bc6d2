"""
cli.py
======
Command-line driver: load a dataset, hold out a test split, evolve fuzzy
classifiers over independent trials and print the report.

Usage
-----
    python -m fuzzrules --data=data/interactions.csv --logic=Godel --nsets=3

Create a synthetic dataset first with ``python data/make_synthetic.py`` if
no real one is at hand.
"""

from __future__ import annotations

import numpy as np
from typing import Optional, Sequence

from .config import RunConfig
from .data import TabularData
from .report import format_report
from .trials import CATEGORIES, TrialSettings, run_trials, trial_seeds


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = RunConfig.from_argv(argv)
    except ValueError as e:
        print(f"[ERROR] Invalid option: {e}")
        print("  Run with --help to list the options and their ranges.")
        return 1
    print("\n".join(config.describe()))

    try:
        data = TabularData.from_csv(config.data)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Failed to load data from '{config.data}': {e}")
        print("  Point --data at a CSV file whose last column is the category, "
              "or run: python data/make_synthetic.py")
        return 1
    if data.num_categories() > len(CATEGORIES):
        print(f"[ERROR] '{config.data}' has {data.num_categories()} categories; "
              f"expected at most {len(CATEGORIES)} (0 and 1).")
        return 1

    data = data.normalised()
    print("\nInput variables:")
    for h, name in enumerate(data.input_names):
        print(f"  {h}: {name}")
    print(f"\nOutput variable: {data.output_name}")
    print(f"\nEntries in the data-set: {data.nrows}")

    rng = np.random.default_rng(config.seed)
    train, test = data.split(config.ptest, rng)
    print(f"Training data size: {train.nrows}")
    print(f"Testing data size: {test.nrows}")

    settings = TrialSettings(logic=config.logic, nsets=config.nsets, alpha=config.alpha,
                             evolution=config.evolution_config(), verbose=config.verbose)
    seeds = trial_seeds(rng, config.trials)
    print("\nSeeds:")
    for s in seeds:
        print(f"  {s}")

    print(f"\n[INFO] Running {config.trials} trials on {config.workers} worker(s) ...")
    results = run_trials(settings, train, test, seeds, workers=config.workers)
    print(format_report(config, results))
    return 0
