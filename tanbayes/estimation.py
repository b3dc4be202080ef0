"""
Probability estimation under one smoothing policy per run.

Every estimate in the package (class marginals, attribute marginals,
attribute-given-class conditionals, the CMI joints and the two-parent CPT
cells) goes through ``ratio`` so that maximum likelihood and Laplace
smoothing share one code path.
"""

from __future__ import annotations
import logging
from typing import List

import numpy as np

from .errors import ConfigurationError, DegenerateDenominatorError
from .network import Dataset, Value

logger = logging.getLogger(__name__)

NONE = "none"
LAPLACE = "laplace"
SMOOTHING_POLICIES = (NONE, LAPLACE)


def check_smoothing(smoothing: str) -> str:
    policy = str(smoothing).strip().lower()
    if policy not in SMOOTHING_POLICIES:
        raise ConfigurationError(
            f"Unknown smoothing policy {smoothing!r}; expected one of {SMOOTHING_POLICIES}")
    return policy


def ratio(count: int, total: int, cardinality: int, smoothing: str, what: str) -> float:
    """
    count / total, or (count + 1) / (total + cardinality) under Laplace.
    *cardinality* is the size of the attribute whose value is being estimated.
    """
    if smoothing == LAPLACE:
        count += 1
        total += cardinality
    if total == 0:
        raise DegenerateDenominatorError(f"Zero denominator while estimating {what}")
    return count / total


# ─────────────────────────── Estimates ────────────────────────────
class Estimates:
    """
    Marginal and class-conditional probabilities of every value in a data set.

    ``class_prior[c]``          P(class = c)
    ``marginals[a][x]``         P(X_a = x)
    ``given_class[a][x, c]``    P(X_a = x | class = c)
    """

    def __init__(self, dataset: Dataset, smoothing: str = NONE):
        self.smoothing = check_smoothing(smoothing)
        self.class_attribute = dataset.class_attribute
        index = dataset.index
        n = len(dataset)
        n_classes = dataset.n_classes

        self.class_prior = np.array([
            ratio(index.class_count(c), n, n_classes, self.smoothing,
                  f"P({dataset.class_attribute.name}={cv.name})")
            for c, cv in enumerate(dataset.class_attribute.values)
        ], dtype=np.float64)

        self.marginals: List[np.ndarray] = []
        self.given_class: List[np.ndarray] = []
        for att in dataset.attributes:
            k = att.cardinality
            marg = np.empty(k, dtype=np.float64)
            cond = np.empty((k, n_classes), dtype=np.float64)
            for val in att.values:
                marg[val.index] = ratio(index.count(val), n, k, self.smoothing,
                                        f"P({att.name}={val.name})")
                for c, cv in enumerate(dataset.class_attribute.values):
                    cond[val.index, c] = ratio(
                        index.joint_count(c, val), index.class_count(c), k, self.smoothing,
                        f"P({att.name}={val.name} | {dataset.class_attribute.name}={cv.name})")
            self.marginals.append(marg)
            self.given_class.append(cond)

        logger.debug("Estimated %d attribute(s) over %d example(s) with smoothing=%s",
                     dataset.n_attributes, n, self.smoothing)

    def probability(self, value: Value) -> float:
        if value.attribute is self.class_attribute:
            return float(self.class_prior[value.index])
        return float(self.marginals[value.attribute.index][value.index])

    def probability_given_class(self, value: Value, class_index: int) -> float:
        return float(self.given_class[value.attribute.index][value.index, class_index])
