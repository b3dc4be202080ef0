"""Conditional mutual information between attribute pairs, given the class."""

from __future__ import annotations
import logging
import math

import numpy as np

from .estimation import Estimates, ratio
from .network import Attribute, Dataset

logger = logging.getLogger(__name__)

# Weight of an attribute paired with itself; below any real CMI.
SELF_PAIR = -1.0


def conditional_mutual_information(first: Attribute, second: Attribute,
                                   dataset: Dataset, estimates: Estimates) -> float:
    """
    CMI(X;Y | C) = sum over (x, y, c) of P(x,y|c) P(c) log2( P(x,y|c) / (P(x|c) P(y|c)) ).

    P(x,y|c) is counted from the training examples with the estimates'
    smoothing policy (Laplace adds |X|*|Y| to the denominator); P(x|c) and
    P(y|c) are the already estimated class conditionals.
    """
    if first is second:
        return SELF_PAIR

    index = dataset.index
    pairs = first.cardinality * second.cardinality
    first_given = estimates.given_class[first.index]
    second_given = estimates.given_class[second.index]

    cmi = 0.0
    for x in first.values:
        for y in second.values:
            for c in range(dataset.n_classes):
                p_both = ratio(index.joint_count(c, x, y), index.class_count(c), pairs,
                               estimates.smoothing,
                               f"P({first.name}={x.name}, {second.name}={y.name} | class {c})")
                # 0 log 0 = 0
                if p_both == 0.0:
                    continue
                cmi += p_both * estimates.class_prior[c] * math.log2(
                    p_both / (first_given[x.index, c] * second_given[y.index, c]))
    return float(cmi)


def cmi_matrix(dataset: Dataset, estimates: Estimates) -> np.ndarray:
    """n x n table of CMI weights; the diagonal holds ``SELF_PAIR``."""
    n = dataset.n_attributes
    table = np.empty((n, n), dtype=np.float64)
    for first in dataset.attributes:
        for second in dataset.attributes:
            table[first.index, second.index] = conditional_mutual_information(
                first, second, dataset, estimates)
    logger.debug("Computed %dx%d CMI matrix", n, n)
    return table
