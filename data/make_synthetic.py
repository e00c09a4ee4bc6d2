"""
make_synthetic.py
=================
Generate a synthetic two-category dataset in the layout the classifier
driver expects: one column per input variable, the category (0 or 1) in the
last column.

The first input is made the most informative feature, since the seeded
classifier splits on it.

Usage
-----
    python data/make_synthetic.py [n_samples] [seed]

Files created
-------------
    data/interactions.csv     : n_samples × 8 (7 inputs + "Interaction")
"""

import os
import sys
import numpy as np
import pandas as pd
from sklearn.datasets import make_classification

DATA_DIR = os.path.dirname(os.path.abspath(__file__))

FEATURE_NAMES = [
    "Similarity", "Coexpression", "Colocalisation", "Domains",
    "Homology", "Pathways", "Literature",
]


def make_interactions(n_samples: int = 2000, seed: int = 42) -> pd.DataFrame:
    """Imbalanced binary data with three informative features."""
    X, y = make_classification(
        n_samples=n_samples,
        n_features=len(FEATURE_NAMES),
        n_informative=3,
        n_redundant=1,
        n_repeated=0,
        n_clusters_per_class=1,
        weights=[0.8, 0.2],
        shuffle=False,
        random_state=seed,
    )
    # informative columns come first with shuffle=False; order them by
    # separation so the first variable carries most of the signal
    gap = np.abs(X[y == 1].mean(axis=0) - X[y == 0].mean(axis=0))
    X = X[:, np.argsort(-gap)]
    if X[y == 1, 0].mean() < X[y == 0, 0].mean():
        X[:, 0] = -X[:, 0]

    frame = pd.DataFrame(X, columns=FEATURE_NAMES)
    frame["Interaction"] = y.astype(int)
    rng = np.random.default_rng(seed)
    return frame.iloc[rng.permutation(n_samples)].reset_index(drop=True)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    n_samples = int(argv[0]) if len(argv) > 0 else 2000
    seed = int(argv[1]) if len(argv) > 1 else 42

    print("=" * 60)
    print("fuzzrules: Synthetic Dataset")
    print("=" * 60)
    frame = make_interactions(n_samples, seed)
    path = os.path.join(DATA_DIR, "interactions.csv")
    frame.to_csv(path, index=False)
    print(f"  Saved {frame.shape[0]} samples × {frame.shape[1] - 1} features → {path}")
    print(f"  Interactions: {frame['Interaction'].sum()} "
          f"({100 * frame['Interaction'].mean():.1f}%)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
