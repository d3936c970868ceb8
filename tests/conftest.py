"""Shared fixtures: a small two-bucket GO-style catalogue."""

import numpy as np
import pytest

from phylofun.core import (
    AnnotationVocabulary,
    MutationProbabilityCatalogue,
    MutationProbabilityMatrix,
)


@pytest.fixture
def vocabulary():
    return AnnotationVocabulary.from_labels(["GO:1", "GO:2", "GO:3"])


@pytest.fixture
def catalogue(vocabulary):
    """Buckets at distance 0.5 and 2.0; GO:3 has nothing landing on it at 0.5."""
    near = np.array([
        [0.10, 0.40, np.nan],
        [0.20, 0.30, np.nan],
        [0.05, 0.60, np.nan],
    ])
    far = np.array([
        [0.50, 0.70, 0.20],
        [0.55, 0.65, 0.25],
        [0.45, 0.80, 0.90],
    ])
    return MutationProbabilityCatalogue(
        matrices=[
            MutationProbabilityMatrix(np.array([0.5]), near, vocabulary),
            MutationProbabilityMatrix(np.array([2.0]), far, vocabulary),
        ]
    )
