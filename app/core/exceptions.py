"""
Engine errors.

HTTP errors are raised by the service layer as ``HTTPException``; the
engine itself stays free of FastAPI.
"""


class SnoozeNotAllowedError(Exception):
    """Exception raised when snoozing an alarm that has snooze disabled."""
