class DuelError(Exception):
    """Base class for failures raised by the duel engine and its catalog."""


class InvalidCommand(DuelError):
    def __init__(self, raw: str) -> None:
        super().__init__(f"Not a recognised command: {raw!r}")
        self.raw = raw


class CatalogLoadError(DuelError):
    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class UnknownOpponent(DuelError, LookupError):
    pass


class InvalidPlayerProfile(DuelError, ValueError):
    pass


class QuitRequested(Exception):
    """Raised when the player types the quit token at any prompt.

    Deliberately not a DuelError: a quit must never be handled as bad input.
    """
