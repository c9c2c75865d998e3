"""Update checking against a remote version endpoint."""

from albatross.update.checker import UpdateChecker, UpdateCheckResult

__all__ = [
    "UpdateCheckResult",
    "UpdateChecker",
]
