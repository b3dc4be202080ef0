"""
Command-line driver.

    python -m tanbayes train.arff test.arff <n|nl|t|tl> [out.bif]

Prints the learned structure, a blank line, one ``predicted actual posterior``
line per test example, a blank line and the number of correct predictions.
"""

from __future__ import annotations
import logging
import os
import sys
from pathlib import Path
from typing import List

from .arff import read_arff
from .bif import write_bif
from .classifier import accuracy, predictions_frame
from .errors import TanBayesError
from .learners import learn_from_type, parse_learner_type

logger = logging.getLogger(__name__)

USAGE = "usage: tanbayes train.arff test.arff <n|nl|t|tl> [out.bif]"


def _format_posterior(p: float) -> str:
    """At most 12 decimals, trailing zeros dropped."""
    return f"{p:.12f}".rstrip("0").rstrip(".")


def _configure_logging():
    level = os.environ.get("TANBAYES_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
                        stream=sys.stderr)


def run(train_path: str, test_path: str, learner_type: str, out_bif: str | None = None) -> int:
    """Learn, print the structure and the test predictions; return the number correct."""
    # reject a bad learner type before reading any data
    parse_learner_type(learner_type)

    train = read_arff(train_path)
    test = read_arff(test_path, catalog=train)
    model = learn_from_type(train, learner_type)

    for line in model.describe_structure():
        print(line)
    print()

    frame = predictions_frame(model, test.examples)
    for row in frame.itertuples(index=False):
        print(f"{row.predicted} {row.actual} {_format_posterior(row.posterior)}")

    correct, fraction = accuracy(frame)
    print()
    print(correct)
    logger.info("Accuracy %.3f (%d/%d)", fraction, correct, len(frame))

    if out_bif:
        write_bif(model, Path(out_bif), name=train.relation or "unknown")
        logger.info("Network saved to %s", out_bif)
    return correct


def main(argv: List[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) not in (3, 4):
        print(USAGE, file=sys.stderr)
        return 1

    _configure_logging()
    try:
        run(*args)
    except (TanBayesError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
