"""Error taxonomy of the bonus rates store.

Every error carries a stable machine-readable ``kind`` and a human-readable
message. The service layer maps kinds to client or server failures.
"""

from __future__ import annotations


class BonusRatesError(Exception):
    """Base class for all bonus rates errors."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(BonusRatesError):
    """Raised when an update payload has the wrong shape.

    Raised before the store is touched, so nothing is written.
    """

    kind = "invalid_input"


class StoreUnavailable(BonusRatesError):
    """Raised when the backing table cannot be created, opened or read."""

    kind = "store_unavailable"


class PartialUpdateFailure(BonusRatesError):
    """Raised when one or more per-key writes of a batch failed.

    Keys listed in ``applied`` were written and stay written.

    Attributes:
        applied: Names whose write completed (including unknown-name no-ops)
        failed: Names whose write raised at the storage layer
    """

    kind = "partial_update_failure"

    def __init__(
        self,
        message: str,
        applied: list[str] | None = None,
        failed: list[str] | None = None,
    ):
        super().__init__(message)
        self.applied = applied or []
        self.failed = failed or []
