"""
fuzzrules
=========
Evolutionary learning of fuzzy rule-based classifiers.

Triangular fuzzy partitions over each input variable, rule bases read with a
t-norm based many-valued logic, and a generational search over rule bases
scored by the True Skill Statistic.
"""
from .truth          import Logic, Boolean, Lukasiewicz, Godel, Product, Truth, LOGICS, get_logic
from .partition      import Slope, Triangle, FuzzyPartition, make_triangles, make_labels, make_partition
from .confusion      import ConfusionMatrix
from .top_n          import TopNMultimap, TopNMap
from .sets           import set_intersection_split_union, map_intersection_split_union, tanimoto
from .data           import TabularData
from .interpretation import Interpretation, FuzzifiedData
from .classifier     import Classifier, Rule, make_antecedent
from .evolution      import EvolutionConfig, EvolutionResult, evolve, mutate, recombine, tss_fitness
from .formula        import Atom, Unary, Binary, Quantifier, show, evaluate, eliminate_double_negation
from .clauses        import Clause, ClausalKB

__all__ = [
    "Logic", "Boolean", "Lukasiewicz", "Godel", "Product", "Truth", "LOGICS", "get_logic",
    "Slope", "Triangle", "FuzzyPartition", "make_triangles", "make_labels", "make_partition",
    "ConfusionMatrix",
    "TopNMultimap", "TopNMap",
    "set_intersection_split_union", "map_intersection_split_union", "tanimoto",
    "TabularData",
    "Interpretation", "FuzzifiedData",
    "Classifier", "Rule", "make_antecedent",
    "EvolutionConfig", "EvolutionResult", "evolve", "mutate", "recombine", "tss_fitness",
    "Atom", "Unary", "Binary", "Quantifier", "show", "evaluate", "eliminate_double_negation",
    "Clause", "ClausalKB",
]
