"""Write a learned model as a BIF network file."""

from __future__ import annotations
from pathlib import Path

from .learners import LearnedModel
from .network import Attribute


# String representation of the variable according to the BIF format
def variable_block(attribute: Attribute) -> str:
    dom = ", ".join(v.name for v in attribute.values)
    k = attribute.cardinality
    return f"variable {attribute.name} {{\n  type discrete [ {k} ] {{ {dom} }};\n}}\n"


def render_bif(model: LearnedModel, name: str = "unknown") -> str:
    nodes = [model.class_node] + model.nodes
    parts = [f"network {name} {{}}\n\n"]
    parts += [variable_block(n.attribute) for n in nodes]
    parts += [str(n.cpt) for n in nodes]
    return "".join(parts)


def write_bif(model: LearnedModel, path: str | Path, name: str = "unknown"):
    with open(path, "w") as f:
        f.write(render_bif(model, name))
