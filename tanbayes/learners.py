"""
Structure and parameter learning for Naive Bayes and TAN.

``learn`` runs the phases in order: estimate, (TAN only) CMI matrix and
spanning tree, assign every node's parents in one step, then build the
CPTs. Catalog attributes are never mutated, so the same training set can be
learned any number of times.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .cmi import cmi_matrix
from .cpt import CPT
from .errors import ConfigurationError, StructureError, ValueLookupError
from .estimation import LAPLACE, NONE, Estimates, check_smoothing
from .network import Attribute, Dataset
from .spanning_tree import MaxSpanningTree

logger = logging.getLogger(__name__)

NAIVE = "naive"
TAN = "tan"
VARIANTS = (NAIVE, TAN)

# Compact codes accepted on the command line
LEARNER_TYPES: Dict[str, Tuple[str, str]] = {
    "n": (NAIVE, NONE),
    "nl": (NAIVE, LAPLACE),
    "t": (TAN, NONE),
    "tl": (TAN, LAPLACE),
}


def check_variant(variant: str) -> str:
    name = str(variant).strip().lower()
    if name not in VARIANTS:
        raise ConfigurationError(f"Unknown model variant {variant!r}; expected one of {VARIANTS}")
    return name


def parse_learner_type(code: str) -> Tuple[str, str]:
    """'n', 'nl', 't' or 'tl' -> (variant, smoothing)."""
    try:
        return LEARNER_TYPES[str(code).strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown learner type {code!r}; use 'n' (naive) or 't' (TAN), "
            f"optionally followed by 'l' for Laplace estimates") from None


# ─────────────────────────── Structures ───────────────────────────
class Node:
    """Learned structure around one attribute; parents and CPT are set once."""

    def __init__(self, attribute: Attribute):
        self.attribute = attribute
        self.parents: Tuple[Attribute, ...] | None = None
        self.children: List[Attribute] = []
        self.cpt: CPT | None = None  # set after the whole structure is fixed

    def set_parents(self, parents: Sequence[Attribute]):
        if self.parents is not None:
            raise StructureError(f"Parents of {self.attribute.name} are already assigned")
        self.parents = tuple(parents)

    def attach_cpt(self, cpt: CPT):
        if self.cpt is not None:
            raise StructureError(f"{self.attribute.name} already has a CPT")
        self.cpt = cpt

    @property
    def tree_parent(self) -> Attribute | None:
        """The non-class parent, if any (tree parent comes first)."""
        if self.parents and len(self.parents) == 2:
            return self.parents[0]
        return None

    def __repr__(self):
        pars = [p.name for p in self.parents or ()]
        return f"Node({self.attribute.name} <- {pars})"


class LearnedModel:
    """Immutable result of ``learn``: structure, estimates and CPTs."""

    def __init__(self, dataset: Dataset, variant: str, smoothing: str,
                 estimates: Estimates, class_node: Node, nodes: List[Node],
                 tree: MaxSpanningTree | None = None, cmi: np.ndarray | None = None):
        self.variant = variant
        self.smoothing = smoothing
        self.attributes = dataset.attributes
        self.class_attribute = dataset.class_attribute
        self.estimates = estimates
        self.class_node = class_node
        self.nodes = nodes  # in catalog order
        self.tree = tree
        self.cmi = cmi

    def node(self, attribute: Attribute | str) -> Node:
        if isinstance(attribute, str):
            for n in self.nodes:
                if n.attribute.name == attribute:
                    return n
            raise ValueLookupError(f"Attribute {attribute} not found.")
        return self.nodes[attribute.index]

    def describe_structure(self) -> List[str]:
        """Each attribute followed by its parents, one line per attribute."""
        return [" ".join([n.attribute.name] + [p.name for p in n.parents]) for n in self.nodes]

    def __repr__(self):
        return (f"LearnedModel(variant={self.variant}, smoothing={self.smoothing}, "
                f"attributes={len(self.nodes)}, classes={self.class_attribute.cardinality})")


# ─────────────────────────── Learning ─────────────────────────────
def _assign_structure(dataset: Dataset, tree: MaxSpanningTree | None) -> Tuple[Node, List[Node]]:
    """Every parent/child link of the model is written here, once."""
    class_node = Node(dataset.class_attribute)
    class_node.set_parents(())
    nodes = [Node(att) for att in dataset.attributes]
    for node in nodes:
        tree_parent = tree.parent_of(node.attribute) if tree is not None else None
        if tree_parent is None:
            node.set_parents((dataset.class_attribute,))
        else:
            node.set_parents((tree_parent, dataset.class_attribute))
            nodes[tree_parent.index].children.append(node.attribute)
        class_node.children.append(node.attribute)
    return class_node, nodes


def learn(training: Dataset, variant: str = NAIVE, smoothing: str = NONE) -> LearnedModel:
    """Learn a Naive Bayes or TAN model from *training*."""
    variant = check_variant(variant)
    smoothing = check_smoothing(smoothing)
    logger.info("Learning %s model (smoothing=%s) from %d example(s), %d attribute(s)",
                variant, smoothing, len(training), training.n_attributes)

    estimates = Estimates(training, smoothing)

    tree = None
    weights = None
    if variant == TAN:
        weights = cmi_matrix(training, estimates)
        tree = MaxSpanningTree(training.attributes, weights)
        logger.info("Spanning tree rooted at %s with %d edge(s), total CMI %.6g",
                    tree.root.name if tree.root else None, len(tree.edges), tree.total_weight())

    class_node, nodes = _assign_structure(training, tree)

    class_node.attach_cpt(CPT.for_class(training.class_attribute, estimates))
    for node in nodes:
        if node.tree_parent is None:
            cpt = CPT.given_class(node.attribute, training.class_attribute, estimates)
        else:
            cpt = CPT.given_parent_and_class(node.attribute, node.tree_parent, training, smoothing)
        node.attach_cpt(cpt)

    return LearnedModel(training, variant, smoothing, estimates, class_node, nodes,
                        tree=tree, cmi=weights)


def learn_from_type(training: Dataset, learner_type: str) -> LearnedModel:
    variant, smoothing = parse_learner_type(learner_type)
    return learn(training, variant, smoothing)


def structure_edges(model: LearnedModel) -> List[Tuple[str, str]]:
    """(parent, child) names of the learned tree edges; empty for Naive Bayes."""
    if model.tree is None:
        return []
    return [(e.parent.name, e.child.name) for e in model.tree.edges]
