"""
Stack Tracker - Manages the container stack for tokenizing.

This class tracks the nesting of objects and arrays being tokenized,
together with the grammar state of each open container.
"""

from typing import List, Optional

from .errors import StructuralError
from .states import ContainerKind, ContainerState, Frame


class StackTracker:
    """
    Manages the container stack during tokenizing.

    The bottom frame is always the implicit DOCUMENT root; it is never popped.
    Opening brackets push a frame, closing brackets pop one after checking
    that its kind matches the bracket.
    """

    def __init__(self):
        self._frames: List[Frame] = [Frame.opened(ContainerKind.DOCUMENT)]

    @property
    def kinds(self) -> List[ContainerKind]:
        """Container kinds from the root outwards."""
        return [frame.kind for frame in self._frames]

    @property
    def top(self) -> Frame:
        """The innermost open container."""
        return self._frames[-1]

    @property
    def state(self) -> ContainerState:
        """Grammar state of the innermost container."""
        return self._frames[-1].state

    @state.setter
    def state(self, value: ContainerState) -> None:
        self._frames[-1].state = value

    @property
    def depth(self) -> int:
        """Number of open objects and arrays."""
        return len(self._frames) - 1

    def in_object(self) -> bool:
        """Check if we're currently inside an object."""
        return self._frames[-1].kind is ContainerKind.OBJECT

    def in_array(self) -> bool:
        """Check if we're currently inside an array."""
        return self._frames[-1].kind is ContainerKind.ARRAY

    def at_root(self) -> bool:
        """Check if no object or array is open."""
        return len(self._frames) == 1

    # ========================================================================
    # TRANSITIONS
    # ========================================================================

    def push(self, kind: ContainerKind) -> None:
        """Open a container of the given kind."""
        self._frames.append(Frame.opened(kind))

    def pop(self, kind: ContainerKind, offset: Optional[int] = None) -> Frame:
        """
        Close the innermost container, which must be of the given kind.

        The enclosing container then holds a complete value.
        """
        if self.at_root() or self.top.kind is not kind:
            raise StructuralError(f"Not expecting {kind.value} end", offset)
        frame = self._frames.pop()
        self.value_completed()
        return frame

    def value_completed(self) -> None:
        """A full value was just read in the innermost container."""
        self.state = ContainerState.EXPECT_SEPARATOR_OR_CLOSE

    def separator_consumed(self) -> None:
        """A comma was just read after a value."""
        if self.in_object():
            self.state = ContainerState.EXPECT_KEY_OR_CLOSE
        else:
            self.state = ContainerState.EXPECT_VALUE_OR_CLOSE

    def key_consumed(self) -> None:
        """A key and its colon were just read."""
        self.state = ContainerState.EXPECT_VALUE

    def __repr__(self) -> str:
        path = "/".join(frame.kind.value for frame in self._frames)
        return f"StackTracker({path}, {self.state.value})"
