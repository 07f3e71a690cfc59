"""Domain errors for cooking sessions and substitutions."""


class CookingError(Exception):
    """Base class for cooking companion errors."""


class NotFoundError(CookingError):
    """A recipe, user, session or personalized recipe is missing."""


class InvalidSelectionError(CookingError):
    """The user picked a choice that the pending proposal does not offer."""


class InvalidQuantityError(CookingError):
    """An ingredient amount is negative, non-numeric or merged to zero."""


class SessionAlreadyResolvedError(CookingError):
    """The cooking session proposal was already consumed."""
