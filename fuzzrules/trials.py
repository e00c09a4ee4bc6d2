"""
trials.py
=========
Independent evolutionary trials, run in parallel worker processes.

Every trial builds its own interpretation (the first input variable split
into two sets, the others into ``nsets``), seeds a classifier with one rule
per set of the first variable, evolves it on the training rows and scores the
initial and the evolved classifier on the held-out rows.  The coordinator
hands out one seed per trial, drawn from the master generator, and waits for
every trial before returning.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from multiprocessing import Pool
from typing import List, Optional, Sequence, Tuple

from .classifier import Classifier
from .data import TabularData
from .evolution import EvolutionConfig, evolve, tss_fitness
from .interpretation import Interpretation

CATEGORIES = ("Non-interaction", "Interaction")

# var 0, set 0 → category 0; var 0, set 1 → category 1
SEED_RULES = (({0: 0}, 0), ({0: 1}, 1))


@dataclass(frozen=True)
class TrialSettings:
    """Everything a trial needs besides its data and its seed."""
    logic: str
    nsets: int
    alpha: float
    evolution: EvolutionConfig
    categories: Tuple[str, ...] = CATEGORIES
    positive: int = 1
    verbose: bool = False


@dataclass
class TrialResult:
    """Outcome of one trial; TSS values are measured on held-out rows."""
    seed: int
    best: Classifier
    initial_tss: float
    evolved_tss: float
    initial_fitness: float
    best_fitness: float
    generations: int

    @property
    def improvement(self) -> float:
        return self.evolved_tss - self.initial_tss

    @property
    def complexity(self) -> int:
        return self.best.complexity()

    @property
    def rules(self) -> int:
        return self.best.size()


def build_interpretation(input_names: Sequence[str], nsets: int, logic: str,
                         categories: Sequence[str] = CATEGORIES) -> Interpretation:
    """Two sets for the first variable, ``nsets`` for the others, all over [0, 1]."""
    interp = Interpretation(categories, logic)
    interp.add_triangular_sets(input_names[0], 2, 0.0, 1.0)
    for name in input_names[1:]:
        interp.add_triangular_sets(name, nsets, 0.0, 1.0)
    return interp


def initial_classifier(interp: Interpretation) -> Classifier:
    return Classifier(interp, SEED_RULES)


def run_trial(settings: TrialSettings, train: TabularData, test: TabularData,
              seed: int) -> TrialResult:
    rng = np.random.default_rng(seed)
    interp = build_interpretation(train.input_names, settings.nsets, settings.logic,
                                  settings.categories)
    kb0 = initial_classifier(interp)
    held_out = interp.fuzzify(test)
    initial_tss = kb0.evaluate_all(held_out).tss(settings.positive)

    result = evolve(kb0, tss_fitness(settings.alpha, settings.positive), train,
                    settings.evolution, rng, protected=SEED_RULES,
                    verbose=settings.verbose)
    evolved_tss = result.best.evaluate_all(held_out).tss(settings.positive)
    return TrialResult(seed, result.best, initial_tss, evolved_tss,
                       result.initial_fitness, result.best_fitness, result.generations)


# ---------------------------------------------------------------------------
# Worker pool
# ---------------------------------------------------------------------------

_shared: Optional[Tuple[TrialSettings, TabularData, TabularData]] = None


def _init_pool(settings: TrialSettings, train: TabularData, test: TabularData) -> None:
    global _shared
    _shared = (settings, train, test)


def _run_seed(seed: int) -> TrialResult:
    settings, train, test = _shared
    return run_trial(settings, train, test, seed)


def trial_seeds(rng: np.random.Generator, trials: int) -> List[int]:
    return [int(s) for s in rng.integers(0, 2**63 - 1, size=trials)]


def run_trials(settings: TrialSettings, train: TabularData, test: TabularData,
               seeds: Sequence[int], workers: int = 1) -> List[TrialResult]:
    """
    Run one trial per seed and return the results in seed order.

    With ``workers > 1`` the trials are spread over a process pool; the data
    is shipped once per worker through the pool initializer.
    """
    seeds = list(seeds)
    if workers <= 1 or len(seeds) <= 1:
        return [run_trial(settings, train, test, s) for s in seeds]
    with Pool(processes=min(workers, len(seeds)), initializer=_init_pool,
              initargs=(settings, train, test)) as pool:
        return pool.map(_run_seed, seeds)
