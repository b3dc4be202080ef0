"""
Reader for ARFF files with nominal attributes only, on top of ``scipy.io.arff``.

    @relation weather
    @attribute outlook {sunny, overcast, rainy}
    @attribute class {yes, no}
    @data
    sunny,no

The attribute called ``class`` is the label; without one, the last declared
attribute is. A test file is read against the training catalog so both data
sets share the same ``Attribute`` and ``Value`` objects.
"""

from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import IO, Iterable, List, Tuple

from scipy.io import arff

from .errors import ArffFormatError
from .network import Attribute, Dataset

logger = logging.getLogger(__name__)


def _domains(meta) -> List[Tuple[str, List[str]]]:
    """(name, nominal values) per declared attribute, in header order."""
    declared = []
    for name in meta.names():
        kind, values = meta[name]
        if kind != "nominal":
            raise ArffFormatError(
                f"attribute {name} is {kind}, not nominal; only {{v1, v2, ...}} domains are supported")
        values = list(values)
        if len(set(values)) != len(values):
            raise ArffFormatError(f"duplicate value in the domain of {name}")
        declared.append((name, values))
    return declared


def _load(source: IO):
    try:
        data, meta = arff.loadarff(source)
    except StopIteration:
        raise ArffFormatError("missing @data section") from None
    except (arff.ArffError, ValueError, IndexError) as e:
        raise ArffFormatError(f"cannot parse ARFF input: {e}") from e
    return data, meta


def _build(data, meta, catalog: Dataset | None) -> Dataset:
    declared = _domains(meta)
    if not declared:
        raise ArffFormatError("no attributes declared")

    names = [n for n, _ in declared]
    lowered = [n.lower() for n in names]
    class_pos = lowered.index("class") if "class" in lowered else len(declared) - 1
    class_name, class_values = declared[class_pos]
    features = declared[:class_pos] + declared[class_pos + 1:]

    if catalog is None:
        attributes = [Attribute(name, i, vals) for i, (name, vals) in enumerate(features)]
        dataset = Dataset(attributes, Attribute(class_name, len(attributes), class_values),
                          relation=meta.name)
    else:
        expected = [a.name for a in catalog.attributes]
        if [n for n, _ in features] != expected or class_name != catalog.class_attribute.name:
            raise ArffFormatError(
                f"header does not match the training attributes {expected + [catalog.class_attribute.name]}")
        dataset = Dataset(catalog.attributes, catalog.class_attribute, relation=meta.name)

    order = [n for n, _ in features] + [class_name]
    for record in data:
        # nominal cells come back as bytes
        row = [record[name].decode() for name in order]
        dataset.examples.append(dataset.make_example(row))

    logger.info("Read relation %s: %d attribute(s), %d example(s)",
                meta.name, dataset.n_attributes, len(dataset))
    return dataset


def parse_arff(lines: Iterable[str], catalog: Dataset | None = None) -> Dataset:
    """Parse ARFF *lines*; with *catalog*, resolve rows against its attributes."""
    text = "\n".join(line.rstrip("\n") for line in lines) + "\n"
    data, meta = _load(io.StringIO(text))
    return _build(data, meta, catalog)


def read_arff(path: str | Path, catalog: Dataset | None = None) -> Dataset:
    with open(path) as fh:
        data, meta = _load(fh)
    return _build(data, meta, catalog)
