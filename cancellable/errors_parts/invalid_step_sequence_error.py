"""Error raised when a task body does not produce a step sequence."""

from __future__ import annotations


class InvalidStepSequenceError(TypeError):
    """Raised when a task body function returns something other than a generator.

    Attributes:
        body: Qualified name of the offending body function.
        got: Type name of the value it returned.
    """

    def __init__(self, body: str, got: str) -> None:
        super().__init__(f"task body {body!r} must return a generator, got {got}")
        self.body = body
        self.got = got


__all__ = ["InvalidStepSequenceError"]
