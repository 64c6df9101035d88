"""Recoverable error kinds raised inside the viewport core.

None of these are fatal. Each is caught at the seam where it can be
recovered (input field, gesture handler, transform store) and logged with
``utils.logger.loggerRecover``.
"""


class ViewportError(Exception):
    """Base class for viewport errors."""


class InvalidInputError(ViewportError, ValueError):
    """Malformed numeric input (bound text field, tile size, coordinates)."""


class InvalidGestureError(InvalidInputError):
    """A touch event reached the coordinate mapper with no contact points."""


class StoreUnavailable(ViewportError, OSError):
    """The transform store's backing file cannot be read or written."""
