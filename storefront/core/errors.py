class NotFoundError(ValueError):
    """Referenced product, variation or cart item does not exist."""


class InvalidInputError(ValueError):
    """Input was well-formed but violates a catalog or cart rule."""
