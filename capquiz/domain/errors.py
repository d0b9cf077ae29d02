from __future__ import annotations


class CapitalQuizError(Exception):
    """Base class for all domain/service errors."""


# -------------------------
# Setup errors (fatal at start)
# -------------------------

class ConfigurationError(CapitalQuizError):
    """Round size or settings are invalid (e.g. more questions than countries)."""


class DataError(CapitalQuizError):
    """A country record is malformed (missing capital, empty cities, unknown continent...)."""


# -------------------------
# Round / session errors
# -------------------------

class StateError(CapitalQuizError):
    """Operation called out of sequence for the current round phase."""
