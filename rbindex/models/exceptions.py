"""
Custom exceptions for the ordered index.
"""


class TreeInvariantError(Exception):
    """
    Raised when the tree reaches a state the balancing logic should make unreachable.

    This is a fail-fast error indicating a bug, not a recoverable condition.
    """


class RotationError(TreeInvariantError):
    """Raised when a rotation is requested on a node lacking the child it promotes."""

    def __init__(self, direction: str, value: int):
        """
        Initialize rotation error.

        Args:
            direction: "left" or "right".
            value: Value stored at the node being rotated.
        """
        self.direction = direction
        self.value = value
        missing = "right" if direction == "left" else "left"
        super().__init__(
            f"illegal {direction} rotate at node {value}: has no {missing} child"
        )


class InvariantViolation(TreeInvariantError):
    """Raised by validation when one of the red-black properties does not hold."""

    def __init__(self, rule: str, detail: str):
        self.rule = rule
        self.detail = detail
        super().__init__(f"{rule} violated: {detail}")
