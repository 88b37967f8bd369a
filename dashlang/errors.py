from dashlang.types import ErrorVal


class DashError(Exception):
    """Exception type used to propagate fatal Dash runtime errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err


class DashSyntaxError(Exception):
    """Raised when source text does not match the Dash grammar."""
    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.line = line
        self.column = column
