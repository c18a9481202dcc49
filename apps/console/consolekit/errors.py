from dataclasses import dataclass


@dataclass
class ConsoleError(Exception):
    operation: str
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.operation}:{self.code}:{self.message}"


class LabelTypeError(ConsoleError, TypeError):
    def __init__(
        self,
        operation: str,
        message: str = "Cannot convert a Symbol value to a string",
    ) -> None:
        super().__init__(operation=operation, code="INVALID_LABEL", message=message)
