"""
Errors raised by the threshold BLS toy.

Both derive from ValueError so callers that already guard against bad input
the usual way keep working.
"""


class InvalidArgument(ValueError):
    """A precondition on the input was violated (bad threshold, empty merge, bad index set)."""


class CurveLibraryFailure(ValueError):
    """A scalar or compressed point could not be decoded."""
