"""Naive Bayes and Tree-Augmented Naive Bayes classifiers for discrete data."""

from .arff import parse_arff, read_arff
from .classifier import accuracy, class_scores, classify, classify_all, predictions_frame
from .errors import (ArffFormatError, ConfigurationError, DegenerateDenominatorError,
                     StructureError, TanBayesError, ValueLookupError)
from .estimation import LAPLACE, NONE, Estimates
from .learners import NAIVE, TAN, LearnedModel, learn, learn_from_type, structure_edges
from .network import Attribute, Dataset, Example, Value

__version__ = "0.1.0"
