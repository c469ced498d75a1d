"""Exceptions raised while building linear combinations."""


class InvalidScalarKindMix(TypeError):
    """Operands of different scalar kinds (clear vs. opaque) were combined.

    Clear data enters an opaque computation only through an explicit
    widening step (Scalar.to_opaque, Variable.into_opaque,
    LinearCombination.into_opaque).
    """

    def __init__(self, expected, got, operation: str = "combine"):
        self.expected = expected
        self.got = got
        super().__init__(
            f"Cannot {operation} {got.name.lower()} operand with "
            f"{expected.name.lower()} operand; widen the clear side with to_opaque()/into_opaque() first"
        )


class UnknownAssignmentError(ValueError):
    """The value of an Unknown assignment was requested."""
