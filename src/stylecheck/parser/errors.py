"""Parser error types."""


class SelectorSyntaxError(Exception):
    """Raised when a selector cannot be parsed by the selector grammar."""

    def __init__(self, message: str, column: int | None = None):
        self.column = column
        super().__init__(message)
