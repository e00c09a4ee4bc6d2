"""
evolution.py
============
Generational evolutionary search over fuzzy rule bases.

Implements:
  - mutation_probability : logistic preference for adding rules while the
                           rule base is simple, for editing/removing them once
                           it grows
  - random_rule / mutate : one stochastic edit of a classifier
  - recombine            : rule-set crossover of two parents
  - tss_fitness          : TSS of the positive category minus a complexity
                           penalty
  - evolve               : mutate → score → keep the top-E elites →
                           rebuild the others from pairs of elites

Each population slot owns its random stream, spawned from the run's
generator, so a run is reproducible from a single seed.
"""

from __future__ import annotations

import math
import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple, Union

from .classifier import Classifier, Rule, make_antecedent
from .data import TabularData
from .interpretation import FuzzifiedData, Interpretation
from .sets import map_intersection_split_union
from .top_n import TopNMultimap

Fitness = Callable[[Classifier, FuzzifiedData], float]
StopPredicate = Callable[[float], bool]


# ---------------------------------------------------------------------------
# Mutation
# ---------------------------------------------------------------------------

def mutation_probability(complexity: float) -> float:
    """
    Probability of growing (rather than editing) a rule base.

        p = 0.6 - 0.4 / (1 + exp(-complexity/2 + 5))

    Close to 0.6 for simple rule bases, decreasing towards 0.2 past a
    complexity of about 10.
    """
    return 0.6 - 0.4 / (1.0 + math.exp(-complexity / 2.0 + 5.0))


def random_rule(interpretation: Interpretation, rng: np.random.Generator) -> Rule:
    """
    Draw a rule: between 1 and ``num_inputs`` picks of a random variable and a
    random fuzzy set of that variable, and a random category.  A variable
    picked twice keeps its last set.
    """
    n = interpretation.num_inputs()
    literals = {}
    for _ in range(int(rng.integers(1, n + 1))):
        var = int(rng.integers(n))
        literals[var] = int(rng.integers(interpretation.num_partitions(var)))
    return Rule(make_antecedent(literals), int(rng.integers(interpretation.num_categories())))


def protect(rules: Iterable[Tuple]) -> FrozenSet[Rule]:
    """Canonical form of rules that ``mutate`` must never alter."""
    return frozenset(Rule(make_antecedent(a), int(c)) for a, c in rules)


def mutate(classifier: Classifier, rng: np.random.Generator,
           protected: FrozenSet[Rule] = frozenset()) -> None:
    """
    Apply one random edit to ``classifier`` in place.

    Parameters
    ----------
    classifier : Classifier
        Rule base to edit.
    rng : np.random.Generator
        Random stream owned by this individual.
    protected : frozenset of Rule
        Rules (see ``protect``) that are put back unchanged when drawn.
        New or edited rules whose antecedent is protected are discarded.

    Notes
    -----
    With p = mutation_probability(complexity):

    * fewer than three rules, or with probability p: add a random rule;
    * otherwise pop a random rule.  A protected rule goes straight back.
      Otherwise, with probability p the rule is edited and re-added:
      with probability 1/num_inputs its category is redrawn, else a random
      variable is picked and, if present, dropped (probability 1/2) or given
      a new fuzzy set, or, if absent, added with a random fuzzy set.  An
      edit that leaves no literal drops the rule.  With probability 1 - p the
      popped rule is simply deleted.
    """
    interp = classifier.interpretation
    # protected antecedents keep their seed category
    guarded = {r.antecedent for r in protected}
    p = mutation_probability(classifier.complexity())
    if classifier.size() < 3 or rng.random() < p:
        rule = random_rule(interp, rng)
        if rule.antecedent not in guarded:
            classifier.add_rule(*rule)
        return

    rule = classifier.pop_random_rule(rng)
    if rule.antecedent in guarded:
        classifier.add_rule(*rule)
        return
    if rng.random() >= p:
        return

    literals = dict(rule.antecedent)
    category = rule.category
    if rng.random() < 1.0 / interp.num_inputs():
        category = int(rng.integers(interp.num_categories()))
    else:
        var = int(rng.integers(interp.num_inputs()))
        if var in literals and rng.random() < 0.5:
            del literals[var]
        else:
            literals[var] = int(rng.integers(interp.num_partitions(var)))
    if make_antecedent(literals) not in guarded:
        classifier.add_rule(literals, category)


def recombine(mom: Classifier, dad: Classifier, rng: np.random.Generator) -> Classifier:
    """
    Child rule base over the parents' shared interpretation.

    Antecedents present in both parents are always inherited, with the
    category of either parent at random; antecedents present in only one are
    inherited with probability 1/2.
    """
    if mom.interpretation is not dad.interpretation:
        raise ValueError("parents must share the same interpretation")
    child = Classifier(mom.interpretation)
    for antecedent, category in map_intersection_split_union(mom.rules(), dad.rules(), rng).items():
        child.add_rule(antecedent, category)
    return child


# ---------------------------------------------------------------------------
# Fitness
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TSSFitness:
    """tss(category) - alpha · complexity; picklable for worker processes."""
    alpha: float = 0.0005
    category: int = 1

    def __call__(self, classifier: Classifier,
                 data: Union[TabularData, FuzzifiedData]) -> float:
        return classifier.evaluate_all(data).tss(self.category) - self.alpha * classifier.complexity()


def tss_fitness(alpha: float = 0.0005, category: int = 1) -> TSSFitness:
    return TSSFitness(float(alpha), int(category))


def _score(fitness: Fitness, classifier: Classifier, data: FuzzifiedData) -> float:
    value = float(fitness(classifier, data))
    return -math.inf if math.isnan(value) else value


# ---------------------------------------------------------------------------
# Generational loop
# ---------------------------------------------------------------------------

@dataclass
class EvolutionConfig:
    """
    Parameters of one evolutionary run.

    Parameters
    ----------
    population : int
        Population size P (≥ 2).
    elites : int
        Elite count E, 0 < E < P.
    generations : int
        Generation budget T (≥ 1).
    mutation_trials, mutation_rate : int, float
        Mutations per individual per generation ~ Binomial(n, pr).
    """
    population: int = 200
    elites: int = 20
    generations: int = 100
    mutation_trials: int = 100
    mutation_rate: float = 0.025

    def __post_init__(self):
        if self.population < 2:
            raise ValueError(f"population must be ≥ 2, got {self.population}")
        if not 0 < self.elites < self.population:
            raise ValueError(
                f"elites must satisfy 0 < E < P, got E={self.elites}, P={self.population}"
            )
        if self.generations < 1:
            raise ValueError(f"generations must be ≥ 1, got {self.generations}")
        if self.mutation_trials < 0:
            raise ValueError(f"mutation_trials must be ≥ 0, got {self.mutation_trials}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must lie in [0, 1], got {self.mutation_rate}")


@dataclass
class EvolutionResult:
    """Outcome of ``evolve``."""
    best: Classifier            # best individual seen (initial one included)
    best_fitness: float
    initial_fitness: float
    generations: int            # generations actually run
    history: pd.DataFrame       # generation, best, mean, elite_min


def evolve(initial: Classifier,
           fitness: Fitness,
           data: Union[TabularData, FuzzifiedData],
           config: EvolutionConfig,
           rng: np.random.Generator,
           protected: Iterable[Tuple] = (),
           stop: Optional[StopPredicate] = None,
           verbose: bool = False,
           log_every: int = 10) -> EvolutionResult:
    """
    Evolve copies of ``initial`` against ``data``.

    Parameters
    ----------
    initial : Classifier
        Seed of every population slot.
    fitness : callable
        (classifier, fuzzified data) → float, higher is better.  NaN ranks
        below every number.
    data : TabularData or FuzzifiedData
        Training rows; fuzzified once up front.
    config : EvolutionConfig
    rng : np.random.Generator
        Drives the per-slot streams and the choice of parents.
    protected : iterable of (antecedent, category)
        Seed rules that mutation keeps.
    stop : callable, optional
        Called with the best fitness seen after each generation; the run
        ends when it returns True.
    verbose : bool
        Print a progress line every ``log_every`` generations.

    Returns
    -------
    EvolutionResult
    """
    interp = initial.interpretation
    train = data if isinstance(data, FuzzifiedData) else interp.fuzzify(data)
    guarded = protect(protected)
    P, E = config.population, config.elites

    seeds = np.random.SeedSequence(int(rng.integers(0, 2**63 - 1))).spawn(P)
    streams = [np.random.default_rng(s) for s in seeds]
    population: List[Classifier] = [initial.copy() for _ in range(P)]

    initial_fitness = _score(fitness, initial, train)
    best, best_fitness = initial.copy(), initial_fitness
    elite = TopNMultimap(E)
    history = []
    generation = 0

    while True:
        generation += 1
        for p in range(P):
            for _ in range(int(streams[p].binomial(config.mutation_trials, config.mutation_rate))):
                mutate(population[p], streams[p], guarded)

        scores = [_score(fitness, c, train) for c in population]
        for p, s in enumerate(scores):
            elite.try_insert(s, p)

        top_score, top_idx = elite.maximum()
        if top_score > best_fitness:
            best, best_fitness = population[top_idx].copy(), top_score

        finite = [s for s in scores if math.isfinite(s)]
        history.append({
            "generation": generation,
            "best"      : best_fitness,
            "mean"      : float(np.mean(finite)) if finite else float("nan"),
            "elite_min" : elite.minimum_key(),
        })
        if verbose and generation % log_every == 0:
            print(f"[INFO] generation {generation:4d}  best {best_fitness:+.4f}  "
                  f"mean {history[-1]['mean']:+.4f}  rules {best.size()}")

        if (stop is not None and stop(best_fitness)) or generation >= config.generations:
            break

        parents = [population[i] for i in elite.values()]
        keep = set(elite.values())
        next_population = list(population)
        for p in range(P):
            if p in keep:
                continue
            if len(parents) == 1:
                next_population[p] = parents[0].copy()
            else:
                a, b = rng.choice(len(parents), size=2, replace=False)
                next_population[p] = recombine(parents[a], parents[b], rng)
        population = next_population
        elite.clear()

    return EvolutionResult(best, best_fitness, initial_fitness, generation,
                           pd.DataFrame(history))
