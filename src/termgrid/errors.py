"""Exception hierarchy for termgrid.

Three families are kept apart so callers can react to each differently:

* :class:`InvalidParameterError` -- a precondition was violated; nothing was
  mutated.
* :class:`LayoutError` -- text could not be laid out as requested.
  :class:`LineCountError` in particular is recoverable: callers are expected
  to fall back to a forced truncation.
* :class:`PartitionError` -- the partition tree is structurally incomplete
  (unregistered or unassociated partitions).

Out-of-bounds writes are never errors; they are clipped silently.
"""

from __future__ import annotations

from collections.abc import Hashable


class TermgridError(Exception):
    """Base class for every error raised by termgrid."""


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------


class InvalidParameterError(TermgridError, ValueError):
    """A required argument is missing or out of its valid range."""

    def __init__(self, parameter: str, reason: str) -> None:
        super().__init__(f"parameter ({parameter!r}) {reason}")
        self.parameter = parameter
        self.reason = reason


def check_non_negative(parameter: str, value: int) -> None:
    if value < 0:
        raise InvalidParameterError(parameter, f"must be >= 0, got {value}")


def check_positive(parameter: str, value: int) -> None:
    if value < 1:
        raise InvalidParameterError(parameter, f"must be > 0, got {value}")


def check_not_none(parameter: str, value: object) -> None:
    if value is None:
        raise InvalidParameterError(parameter, "must not be None")


# ---------------------------------------------------------------------------
# Partition tree
# ---------------------------------------------------------------------------


class PartitionError(TermgridError):
    """Structural problem in a partition layout."""

    def __init__(self, partition: Hashable, message: str) -> None:
        super().__init__(message)
        self.partition = partition


class AlreadyRegisteredError(PartitionError):
    def __init__(self, partition: Hashable) -> None:
        super().__init__(partition, f"partition {partition!r} is already registered")


class NotRegisteredError(PartitionError):
    def __init__(self, partition: Hashable) -> None:
        super().__init__(partition, f"partition {partition!r} is not registered")


class AlreadyAssociatedError(PartitionError):
    def __init__(self, partition: Hashable) -> None:
        super().__init__(partition, f"partition {partition!r} is already associated")


class NotAssociatedError(PartitionError):
    def __init__(self, partition: Hashable) -> None:
        super().__init__(partition, f"partition {partition!r} is not associated")


# ---------------------------------------------------------------------------
# Text layout
# ---------------------------------------------------------------------------


class LayoutError(TermgridError):
    """Text could not be laid out with the requested constraints."""


class LineCountError(LayoutError):
    """The number of lines could not be computed: a field is too wide."""

    def __init__(self, field: str, width: int) -> None:
        super().__init__(
            f"could not compute line count: field {field!r} "
            f"({len(field)} runes) exceeds width {width}"
        )
        self.field = field
        self.width = width


class SplitError(LayoutError):
    """The fields cannot be split into the requested number of lines."""


class SuffixTooLongError(LayoutError):
    """A truncation suffix is longer than the text it should replace."""

    def __init__(self, text: str, suffix: str) -> None:
        super().__init__(f"suffix {suffix!r} is longer than {text!r}")
        self.text = text
        self.suffix = suffix


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


class DrawError(TermgridError):
    """A drawable failed while being drawn; the cause is chained."""
