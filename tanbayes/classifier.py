"""
Inference with a learned model.

Scores are accumulated in log space: score[c] = log P(c) + sum of the log
conditional probability of every attribute value of the example given its
parents. The reported posterior is the arg-max score divided by the sum of
the class scores, which is the same number as the linear-space ratio.
"""

from __future__ import annotations
import math
from typing import Iterable, List, Tuple

import numpy as np
import pandas as pd

from .errors import DegenerateDenominatorError, ValueLookupError
from .learners import LearnedModel
from .network import Example


def _logsumexp(values):
    """Stable log ∑ exp(values)."""
    m = max(values)
    if m == float("-inf"):
        return m
    return m + math.log(sum(math.exp(v - m) for v in values))


def class_scores(model: LearnedModel, example: Example) -> np.ndarray:
    """Unnormalised log score of every class value for *example*."""
    if len(example.values) != len(model.nodes):
        raise ValueLookupError(
            f"Example has {len(example.values)} values, model has {len(model.nodes)} attributes")

    with np.errstate(divide="ignore"):
        scores = np.log(model.estimates.class_prior)
        for node, value in zip(model.nodes, example.values):
            if value.attribute is not node.attribute:
                raise ValueLookupError(
                    f"Value {value.name} does not belong to attribute {node.attribute.name} "
                    f"of the learned model")
            parent = node.tree_parent
            if parent is None:
                probs = model.estimates.given_class[node.attribute.index][value.index, :]
            else:
                parent_value = example.value_of(parent)
                probs = node.cpt.table[value.index, parent_value.index, :]
            scores = scores + np.log(probs)
    return scores


def classify(model: LearnedModel, example: Example) -> Tuple[int, float]:
    """
    Predict the class index of *example* and the normalised score of the
    prediction; both are recorded on the example. Ties go to the first class.

    The recorded prediction is write-once: classifying the same example with
    a second model that disagrees raises ``StructureError``. To compare
    models, give each one its own test set via ``Dataset.with_examples``.
    """
    scores = class_scores(model, example)
    prediction = int(np.argmax(scores))
    total = _logsumexp(scores.tolist())
    if total == float("-inf"):
        raise DegenerateDenominatorError(
            f"Every class score is zero for {example!r}; cannot normalise")
    posterior = math.exp(scores[prediction] - total)
    example.record_prediction(prediction, posterior)
    return prediction, posterior


def classify_all(model: LearnedModel, examples: Iterable[Example]) -> List[Tuple[int, float]]:
    return [classify(model, ex) for ex in examples]


def predictions_frame(model: LearnedModel, examples: Iterable[Example]) -> pd.DataFrame:
    """Classify *examples*; one row per example with predicted/actual names and posterior."""
    class_values = model.class_attribute.values
    rows = []
    for ex in examples:
        prediction, posterior = classify(model, ex)
        rows.append({
            "predicted": class_values[prediction].name,
            "actual": ex.class_value.name,
            "posterior": posterior,
        })
    return pd.DataFrame(rows, columns=["predicted", "actual", "posterior"])


def accuracy(frame: pd.DataFrame) -> Tuple[int, float]:
    """(number correct, fraction correct) of a predictions frame."""
    correct = int((frame["predicted"] == frame["actual"]).sum())
    return correct, correct / len(frame) if len(frame) else 0.0
