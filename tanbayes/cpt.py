from __future__ import annotations
from itertools import product
from typing import Iterator, List, Tuple

import numpy as np

from .estimation import Estimates, ratio
from .network import Attribute, Dataset


class CPT:
    """
    Conditional-probability table P(head | parents).

    ``table[x, p, c]`` is indexed by the head's value, the tree parent's value
    and the class value. Dimensions that a head does not depend on have size 1:
    the class itself is (k, 1, 1), an attribute whose only parent is the class
    is (k, 1, |C|), and a TAN non-root attribute is (k, |P|, |C|).
    """

    def __init__(self, head: Attribute, parents: List[Attribute], table: np.ndarray):
        self.head = head  # The attribute this CPT belongs to
        self.parents = parents  # [] / [class] / [tree parent, class]
        self.table = table

    # ---------------- constructors ----------------
    @classmethod
    def for_class(cls, class_attribute: Attribute, estimates: Estimates) -> "CPT":
        table = estimates.class_prior.reshape(-1, 1, 1).copy()
        return cls(class_attribute, [], table)

    @classmethod
    def given_class(cls, attribute: Attribute, class_attribute: Attribute,
                    estimates: Estimates) -> "CPT":
        table = estimates.given_class[attribute.index][:, np.newaxis, :].copy()
        return cls(attribute, [class_attribute], table)

    @classmethod
    def given_parent_and_class(cls, attribute: Attribute, parent: Attribute,
                               dataset: Dataset, smoothing: str) -> "CPT":
        """
        Count every (value, parent value, class value) triple: the examples
        holding the class and parent values are the "given" count, those that
        also hold the attribute value are the "matching" count.
        """
        index = dataset.index
        class_attribute = dataset.class_attribute
        table = np.empty((attribute.cardinality, parent.cardinality, dataset.n_classes),
                         dtype=np.float64)
        for c, cv in enumerate(class_attribute.values):
            for pv in parent.values:
                given = index.joint_count(c, pv)
                for av in attribute.values:
                    matching = index.joint_count(c, pv, av)
                    table[av.index, pv.index, c] = ratio(
                        matching, given, attribute.cardinality, smoothing,
                        f"P({attribute.name}={av.name} | {parent.name}={pv.name}, "
                        f"{class_attribute.name}={cv.name})")
        return cls(attribute, [parent, class_attribute], table)

    # ---------------- lookups ----------------
    def probability(self, value_index: int, parent_value_index: int = 0,
                    class_index: int = 0) -> float:
        return float(self.table[value_index, parent_value_index, class_index])

    def rows(self) -> Iterator[Tuple[Tuple[str, ...], np.ndarray]]:
        """(parent value names, distribution over head values) per parent configuration."""
        if not self.parents:
            yield (), self.table[:, 0, 0]
            return
        if len(self.parents) == 1:
            for cv in self.parents[0].values:
                yield (cv.name,), self.table[:, 0, cv.index]
            return
        parent, class_attribute = self.parents
        for pv, cv in product(parent.values, class_attribute.values):
            yield (pv.name, cv.name), self.table[:, pv.index, cv.index]

    # String representation of the CPT according to the BIF format
    def __str__(self):
        head = self.head.name
        if not self.parents:
            probs = ", ".join(map(str, self.table[:, 0, 0]))
            return f"probability ( {head} ) {{\n  table {probs};\n}}\n"

        def _row_str(key, row):
            par_vals = ", ".join(key)
            probs = ", ".join(map(str, row))
            return f"  ( {par_vals} ) {probs};"

        body = "\n".join(_row_str(k, r) for k, r in self.rows())
        par_names = ", ".join(p.name for p in self.parents)
        return f"probability ( {head} | {par_names} ) {{\n{body}\n}}\n"
