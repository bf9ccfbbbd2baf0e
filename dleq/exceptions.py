"""
Common exception classes.
"""


class InconsistentCurvesError(Exception):
    """Points are on different curves."""


class PointOffCurveError(Exception):
    """One of the points is off the curve."""


class InvalidPointError(Exception):
    """Marshaled point was invalid."""


class UnsupportedHashError(ValueError):
    """Hash algorithm is unknown or does not produce a fixed-length digest."""


class EntropySourceError(OSError):
    """The entropy source could not supply an acceptable scalar."""


class SerializationError(ValueError):
    """Serialized proof is malformed."""
