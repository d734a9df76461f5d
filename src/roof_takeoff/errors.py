"""Exceptions raised by the takeoff engine."""


class TakeoffError(Exception):
    """Base class for engine errors."""


class UnknownShapeError(TakeoffError, LookupError):
    """A notification referenced a shape id the engine does not own.

    The hosting surface and the engine have diverged; there is no recovery.
    """

    def __init__(self, shape_id: str):
        super().__init__(f"Unknown shape id: {shape_id}")
        self.shape_id = shape_id


class SessionStateError(TakeoffError):
    """A notification contradicts the active drawing tool."""
