"""Exception taxonomy for the listings pipeline.

All errors are fatal for a run; the CLI logs them and exits non-zero.
"""

from __future__ import annotations


class ListingsError(Exception):
    """Base class for pipeline failures reported to the caller."""


class InputNotFound(ListingsError):
    """The listings CSV path does not resolve to a file."""


class SchemaMismatch(ListingsError):
    """An expected column is absent or holds values of the wrong type."""


class InvalidInput(ListingsError):
    """A value reached aggregation that violates its precondition."""
