"""
config.py
=========
Run configuration of the command-line driver.

Options are read with argparse (``--name=value`` or ``--name value``) and
normalised into a ``RunConfig``: population floor of 8, generation budget
floor of 100, elites defaulting to P/10 and capped at P/2.  An unknown logic
name falls back to Łukasiewicz with a warning.
"""

from __future__ import annotations

import argparse
import os
import time
from dataclasses import dataclass, field
from multiprocessing import cpu_count
from typing import List, Optional, Sequence

from .evolution import EvolutionConfig
from .truth import Godel, Lukasiewicz, Product, get_logic

DEFAULT_LOGIC = Lukasiewicz.name
FUZZY_LOGICS = (Lukasiewicz, Godel, Product)
DEFAULT_DATA = os.path.join("data", "interactions.csv")

MIN_POPULATION = 8
MIN_STEPS = 100


def resolve_logic(name: str) -> str:
    """Display name of a fuzzy logic; unknown names give Łukasiewicz and a warning."""
    try:
        logic = get_logic(name)
    except KeyError:
        logic = None
    if logic not in FUZZY_LOGICS:
        print(f'[WARN] Invalid logic name "{name}", defaulting to "{DEFAULT_LOGIC}".')
        return DEFAULT_LOGIC
    return logic.name


@dataclass
class RunConfig:
    """
    Parameters of a batch of independent evolutionary trials.

    Parameters
    ----------
    logic : str
        "Łukasiewicz", "Gödel-Dummett" or "Product" (aliases accepted).
    seed : int
        Master seed; defaults to the current time.
    trials : int
        Number of independent runs.
    nsets : int
        Fuzzy sets per input variable (the first variable always gets two).
    populations : int
        Population size P, at least 8.
    elites : int, optional
        Elite count; P/10 by default, at most P/2 and at least 1.
    steps : int
        Generation budget T, at least 100.
    alpha : float
        Complexity penalty of the fitness.
    ptest : float
        Proportion of rows held out for testing.
    mutations, mutation_rate : int, float
        Binomial(n, pr) mutation count per individual per generation.
    workers : int
        Worker processes for the trials (1 runs them in-process).
    data : str
        CSV file, last column is the category.
    """
    logic: str = DEFAULT_LOGIC
    seed: int = field(default_factory=lambda: int(time.time()))
    trials: int = 20
    nsets: int = 5
    populations: int = 200
    elites: Optional[int] = None
    steps: int = MIN_STEPS
    alpha: float = 0.0005
    ptest: float = 0.1
    mutations: int = 100
    mutation_rate: float = 0.025
    workers: int = 1
    data: str = DEFAULT_DATA
    verbose: bool = False

    def __post_init__(self):
        self.logic = resolve_logic(self.logic)
        if self.trials < 1:
            raise ValueError(f"trials must be ≥ 1, got {self.trials}")
        if self.nsets < 2:
            raise ValueError(f"nsets must be ≥ 2, got {self.nsets}")
        if not 0.0 <= self.ptest < 1.0:
            raise ValueError(f"ptest must lie in [0, 1), got {self.ptest}")
        if self.alpha < 0:
            raise ValueError(f"alpha must be non-negative, got {self.alpha}")
        if self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        self.populations = max(int(self.populations), MIN_POPULATION)
        self.steps = max(int(self.steps), MIN_STEPS)
        elites = self.populations // 10 if self.elites is None else int(self.elites)
        self.elites = max(1, min(elites, self.populations // 2))
        self.workers = max(1, int(self.workers))

    @property
    def nonelites(self) -> int:
        return self.populations - self.elites

    def evolution_config(self) -> EvolutionConfig:
        return EvolutionConfig(population=self.populations, elites=self.elites,
                               generations=self.steps, mutation_trials=self.mutations,
                               mutation_rate=self.mutation_rate)

    def describe(self) -> List[str]:
        return [
            "Parameters:",
            f"  Seed: {self.seed}",
            f"  Trials: {self.trials}",
            f"  Logic: {self.logic}",
            f"  Fuzzy sets per input variables: {self.nsets}",
            f"  Population size: {self.populations}",
            f"  Elites: {self.elites}",
            f"  Non-elites: {self.nonelites}",
            f"  Generations: {self.steps}",
            f"  Complexity penalty (alpha): {self.alpha}",
            f"  Proportion held for testing: {self.ptest}",
            f"  Workers: {self.workers}",
        ]

    @classmethod
    def from_argv(cls, argv: Optional[Sequence[str]] = None) -> "RunConfig":
        args = build_parser().parse_args(argv)
        return cls(**vars(args))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fuzzrules",
        description="Evolve fuzzy rule-based classifiers over repeated independent trials.",
    )
    p.add_argument("--logic", default=DEFAULT_LOGIC,
                   help='"Łukasiewicz", "Gödel-Dummett" (or "Godel") or "Product"')
    p.add_argument("--seed", type=int, default=int(time.time()),
                   help="master random seed (default: current time)")
    p.add_argument("--trials", type=int, default=20)
    p.add_argument("--nsets", type=int, default=5,
                   help="fuzzy sets per input variable")
    p.add_argument("--populations", type=int, default=200,
                   help=f"population size (at least {MIN_POPULATION})")
    p.add_argument("--elites", type=int, default=None,
                   help="elite count (default: population/10, at most population/2)")
    p.add_argument("--steps", type=int, default=MIN_STEPS,
                   help=f"generation budget (at least {MIN_STEPS})")
    p.add_argument("--alpha", type=float, default=0.0005,
                   help="complexity penalty")
    p.add_argument("--ptest", type=float, default=0.1,
                   help="proportion of rows held out for testing")
    p.add_argument("--mutations", type=int, default=100,
                   help="binomial trials of the per-generation mutation count")
    p.add_argument("--mutation-rate", dest="mutation_rate", type=float, default=0.025,
                   help="binomial probability of the per-generation mutation count")
    p.add_argument("--workers", type=int, default=min(20, cpu_count()),
                   help="worker processes (1 runs trials in-process)")
    p.add_argument("--data", default=DEFAULT_DATA,
                   help="CSV file whose last column is the category")
    p.add_argument("--verbose", action="store_true",
                   help="print evolution progress")
    return p
