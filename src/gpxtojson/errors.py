# gpxtojson/errors

"""
gpxtojson.errors

Central exception hierarchy for gpxtojson.

Callers can catch GpxToJsonError (broad) or specific subclasses (narrow).
"""


class GpxToJsonError(RuntimeError):
    """Base class for all gpxtojson runtime errors."""


# ---- Decoding errors ---------------------------

class DecodeError(GpxToJsonError):
    """Errors turning a source document into the raw track hierarchy."""

class InvalidGpxError(DecodeError):
    """GPX input could not be parsed or did not contain expected data structures."""


# ---- Aggregation errors ------------------------

class AggregateError(GpxToJsonError):
    """Errors raised while enriching the track hierarchy."""

class NonMonotonicTimeError(AggregateError):
    """A point is timestamped earlier than its predecessor and the policy is 'reject'."""


# ---- Configuration errors ----------------------

class ConfigError(GpxToJsonError):
    """Invalid configuration values or unreadable config files."""
