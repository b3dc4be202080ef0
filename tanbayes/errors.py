"""Exceptions raised by the learner. The command line turns them into exit codes."""


class TanBayesError(Exception):
    """Base class for every error raised by tanbayes."""


class ConfigurationError(TanBayesError, ValueError):
    """Unknown model variant, smoothing policy or learner-type code."""


class ValueLookupError(TanBayesError, KeyError):
    """A value or attribute name that the catalog does not know."""

    # KeyError.__str__ would quote the whole message
    def __str__(self):
        return str(self.args[0]) if self.args else ""


class DegenerateDenominatorError(TanBayesError, ZeroDivisionError):
    """An estimate divided by a zero count (maximum likelihood only)."""


class ArffFormatError(TanBayesError, ValueError):
    """Malformed or unsupported ARFF input."""


class StructureError(TanBayesError, RuntimeError):
    """A write-once field assigned a second time."""
