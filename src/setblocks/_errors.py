from __future__ import annotations


class InvalidArgument(TypeError):
    """A required argument of a set operation is absent or unusable.

    Raised before any element is visited, so a failing call never produces a
    partial result.
    """

    def __init__(self, operation: str, parameter: str, reason: str) -> None:
        self.operation = operation
        self.parameter = parameter
        super().__init__(f"{operation}(): {parameter} {reason}")
