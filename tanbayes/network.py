"""
Catalog and example store for discrete attribute data.

The catalog (attributes, their values and the class attribute) is read-only
once built. Examples reference catalog ``Value`` objects, and the only
per-example state that may be written later is the prediction recorded by
the classifier. Counting never walks back-references from values to
examples; it goes through a ``ValueIndex`` built once per data set.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import StructureError, ValueLookupError


# ─────────────────────────── Catalog ──────────────────────────────
class Value:
    """One entry of an attribute's ordered value list."""

    def __init__(self, name: str, index: int, attribute: "Attribute"):
        self.name = name
        self.index = index  # position inside the owning attribute
        self.attribute = attribute

    def __repr__(self):
        return f"Value({self.attribute.name}={self.name})"


class Attribute:
    """A discrete attribute with an ordered value enumeration."""

    def __init__(self, name: str, index: int, values: Sequence[str]):
        self.name = name
        self.index = index
        self.values: List[Value] = [Value(v, i, self) for i, v in enumerate(values)]
        self._by_name: Dict[str, Value] = {v.name: v for v in self.values}

    @property
    def cardinality(self) -> int:
        return len(self.values)

    def value(self, name: str) -> Value:
        """Return the value called *name*, or raise ``ValueLookupError``."""
        try:
            return self._by_name[name]
        except KeyError:
            raise ValueLookupError(
                f"Value {name} not found for attribute {self.name}.") from None

    def __repr__(self):
        return f"Attribute({self.name}, {[v.name for v in self.values]})"


# ─────────────────────────── Examples ─────────────────────────────
class Example:
    """
    One row: a value per non-class attribute (in catalog order) plus the
    class value. The prediction fields are written once by the classifier.
    """

    def __init__(self, values: Sequence[Value], class_value: Value):
        self.values: Tuple[Value, ...] = tuple(values)
        self.class_value = class_value
        self.predicted_class_index: int | None = None
        self.posterior: float | None = None

    def value_of(self, attribute: Attribute) -> Value:
        return self.values[attribute.index]

    def record_prediction(self, class_index: int, posterior: float):
        if self.predicted_class_index is not None and \
                (self.predicted_class_index, self.posterior) != (class_index, posterior):
            raise StructureError("A different prediction was already recorded "
                                 "for this example.")
        self.predicted_class_index = class_index
        self.posterior = posterior

    def __repr__(self):
        vals = ", ".join(v.name for v in self.values)
        return f"Example({vals} | {self.class_value.name})"


class ValueIndex:
    """
    Maps (attribute index, value index) and class-value index to the sorted
    ids of the examples holding them. Built once, never mutated.
    """

    def __init__(self, dataset: "Dataset"):
        self.n_examples = len(dataset.examples)
        codes = np.array([[v.index for v in ex.values] for ex in dataset.examples],
                         dtype=np.int64).reshape(self.n_examples, dataset.n_attributes)
        labels = np.array([ex.class_value.index for ex in dataset.examples],
                          dtype=np.int64)

        self._rows: Dict[Tuple[int, int], np.ndarray] = {}
        for att in dataset.attributes:
            for val in att.values:
                self._rows[(att.index, val.index)] = np.flatnonzero(codes[:, att.index] == val.index)
        self._class_rows: List[np.ndarray] = [
            np.flatnonzero(labels == c.index) for c in dataset.class_attribute.values
        ]

    def rows(self, value: Value) -> np.ndarray:
        return self._rows[(value.attribute.index, value.index)]

    def class_rows(self, class_index: int) -> np.ndarray:
        return self._class_rows[class_index]

    def count(self, value: Value) -> int:
        return len(self.rows(value))

    def class_count(self, class_index: int) -> int:
        return len(self._class_rows[class_index])

    def joint_count(self, class_index: int, *values: Value) -> int:
        """Number of examples labelled *class_index* that hold every one of *values*."""
        ids = self._class_rows[class_index]
        for v in values:
            ids = np.intersect1d(ids, self.rows(v), assume_unique=True)
        return len(ids)


class Dataset:
    """Attribute catalog plus an ordered sequence of examples over it."""

    def __init__(self, attributes: Sequence[Attribute], class_attribute: Attribute,
                 examples: Iterable[Example] = (), relation: str | None = None):
        self.relation = relation
        self.attributes: List[Attribute] = list(attributes)
        self.class_attribute = class_attribute
        self.examples: List[Example] = list(examples)
        self._by_name = {a.name: a for a in self.attributes}
        self._index: ValueIndex | None = None

    @classmethod
    def from_domains(cls, domains: Dict[str, List[str]], class_name: str,
                     class_values: List[str], rows: Iterable[Sequence[str]] = ()):
        """
        Build a catalog from ``{attribute: [values]}`` (insertion order is the
        catalog order) and load *rows*; each row lists one value name per
        attribute followed by the class value name.
        """
        attributes = [Attribute(name, i, vals) for i, (name, vals) in enumerate(domains.items())]
        class_attribute = Attribute(class_name, len(attributes), class_values)
        ds = cls(attributes, class_attribute)
        ds.examples = [ds.make_example(row) for row in rows]
        return ds

    def with_examples(self, rows: Iterable[Sequence[str]]) -> "Dataset":
        """A new data set over this catalog (e.g. the test set)."""
        ds = Dataset(self.attributes, self.class_attribute, relation=self.relation)
        ds.examples = [ds.make_example(row) for row in rows]
        return ds

    def make_example(self, row: Sequence[str]) -> Example:
        if len(row) != self.n_attributes + 1:
            raise ValueLookupError(
                f"Expected {self.n_attributes + 1} values per row, got {len(row)}: {list(row)}")
        values = [att.value(name) for att, name in zip(self.attributes, row)]
        return Example(values, self.class_attribute.value(row[-1]))

    def attribute(self, name: str) -> Attribute:
        try:
            return self._by_name[name]
        except KeyError:
            raise ValueLookupError(f"Attribute {name} not found.") from None

    @property
    def n_attributes(self) -> int:
        return len(self.attributes)

    @property
    def n_classes(self) -> int:
        return self.class_attribute.cardinality

    @property
    def index(self) -> ValueIndex:
        # examples are fixed after loading, so the index is built lazily once
        if self._index is None:
            self._index = ValueIndex(self)
        return self._index

    def __len__(self):
        return len(self.examples)
