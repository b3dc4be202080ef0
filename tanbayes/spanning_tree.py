"""Greedy maximum-weight spanning tree over attributes, grown from a fixed root."""

from __future__ import annotations
import logging
from typing import Dict, List, Sequence

import numpy as np

from .network import Attribute

logger = logging.getLogger(__name__)


class Edge:
    """Directed tree edge parent -> child with its CMI weight."""

    def __init__(self, parent: Attribute, child: Attribute, weight: float):
        self.parent = parent
        self.child = child
        self.weight = weight

    def __repr__(self):
        return f"Edge({self.parent.name} -> {self.child.name}, {self.weight:.6g})"


class MaxSpanningTree:
    """
    Prim-style growth: the root is the first attribute; at every step the
    (tree node, remaining node) pair with the highest weight is added.
    Ties go to the earliest tree node (in the order nodes joined the tree),
    then to the earliest remaining node in catalog order.
    """

    def __init__(self, attributes: Sequence[Attribute], weights: np.ndarray):
        self.weights = weights
        self.nodes: List[Attribute] = []
        self.edges: List[Edge] = []
        self.root: Attribute | None = attributes[0] if attributes else None
        self._parent: Dict[int, Attribute] = {}

        if self.root is None:
            return
        self.nodes.append(self.root)
        remaining = list(attributes[1:])
        while remaining:
            edge = self._best_edge(remaining)
            self.edges.append(edge)
            self.nodes.append(edge.child)
            remaining.remove(edge.child)
            self._parent[edge.child.index] = edge.parent
            logger.debug("Tree edge %s -> %s (cmi=%.6g)",
                         edge.parent.name, edge.child.name, edge.weight)

    def _best_edge(self, remaining: List[Attribute]) -> Edge:
        best = (self.nodes[0], remaining[0])
        best_weight = self.weights[best[0].index, best[1].index]
        for tree_node in self.nodes:
            for candidate in remaining:
                weight = self.weights[tree_node.index, candidate.index]
                # strict comparison keeps the first pair on ties
                if weight > best_weight:
                    best_weight = weight
                    best = (tree_node, candidate)
        return Edge(best[0], best[1], float(best_weight))

    def parent_of(self, attribute: Attribute) -> Attribute | None:
        """Tree parent of *attribute*, or None for the root."""
        return self._parent.get(attribute.index)

    def children_of(self, attribute: Attribute) -> List[Attribute]:
        return [e.child for e in self.edges if e.parent is attribute]

    def total_weight(self) -> float:
        return float(sum(e.weight for e in self.edges))

    def __len__(self):
        return len(self.nodes)
