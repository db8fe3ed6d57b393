"""Exception types shared by the core engine, the persistence layer and the web app.

The web app maps each of these to an HTTP status in app/main.py.  None of them
are fatal: the user can always retry the action that raised them.
"""


class ValidationError(ValueError):
    """User input was rejected before any generation or write was attempted."""


class NoEligibleRecipeError(Exception):
    """Every recipe in the active pool was vetoed by a family member's dislikes."""

    def __init__(self, message: str = "No recipe satisfies the current family constraints."):
        super().__init__(message)


class PersistenceError(Exception):
    """A read or write against the SQLite store failed."""


class PartialWriteError(PersistenceError):
    """A multi-row write finished with some rows missing.

    missing holds the keys (ISO dates for daily menus) that could not be
    confirmed by re-reading after the write.
    """

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Write incomplete, missing rows for: {', '.join(self.missing)}")
