"""
exproto Exceptions

Resource acquisition failures raised by the I/O layer.
Malformed C input is never an error; the scanners stop at end of input.
"""


class ExprotoError(Exception):
    """Base exception for exproto errors"""

    def __init__(self, message: str, path: str = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"path={self.path}")
        return " | ".join(parts)


class InputOpenError(ExprotoError):
    """Input file cannot be opened"""
    pass


class OutputOpenError(ExprotoError):
    """Output file cannot be created"""
    pass


class PreprocessorError(ExprotoError):
    """External preprocessor cannot be started"""

    def __init__(self, message: str, command: list = None, **kwargs):
        self.command = command or []
        super().__init__(message, **kwargs)

    def _format_message(self) -> str:
        msg = super()._format_message()
        if self.command:
            msg += f" | command: {' '.join(self.command)}"
        return msg
