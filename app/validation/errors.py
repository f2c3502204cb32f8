"""
The single failure kind raised by every validator in this package.
"""


class InvalidInputError(ValueError):
    """Client-side input rejected by a validator. The message is user-facing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
