"""
Container States - What the grammar allows next inside each open container.

Every open container (and the implicit document root) carries exactly one
ContainerState. The tokenizer reads the state of the innermost container to
decide how the next significant byte is interpreted.
"""

from dataclasses import dataclass
from enum import Enum


class ContainerKind(Enum):
    """Type tag of an open nesting scope."""

    DOCUMENT = "document"
    OBJECT = "object"
    ARRAY = "array"


class ContainerState(Enum):
    """Grammar expectation for the innermost container."""

    # Start of an array or document, or after a comma in one
    EXPECT_VALUE_OR_CLOSE = "expect-value-or-close"
    # After a key and its colon
    EXPECT_VALUE = "expect-value"
    # After a complete value
    EXPECT_SEPARATOR_OR_CLOSE = "expect-separator-or-close"
    # Start of an object, or after a comma in one
    EXPECT_KEY_OR_CLOSE = "expect-key-or-close"


INITIAL_STATES = {
    ContainerKind.DOCUMENT: ContainerState.EXPECT_VALUE_OR_CLOSE,
    ContainerKind.OBJECT: ContainerState.EXPECT_KEY_OR_CLOSE,
    ContainerKind.ARRAY: ContainerState.EXPECT_VALUE_OR_CLOSE,
}


@dataclass
class Frame:
    """One entry of the container stack."""

    kind: ContainerKind
    state: ContainerState

    @classmethod
    def opened(cls, kind: ContainerKind) -> 'Frame':
        return cls(kind, INITIAL_STATES[kind])
