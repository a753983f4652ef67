"""Nesting context tracked while classifying a query."""

from dataclasses import dataclass
from enum import Enum


class ContextKind(Enum):
    """Syntactic positions that change how a fragment is classified."""

    TOP_LEVEL = "top_level"  # Filter clauses and pipeline stages
    FUNCTION_ARGS = "function_args"  # Inside foo(...)
    MATCH_BODY = "match_body"  # Inside field match { ... } or case { ... }


@dataclass(frozen=True)
class ContextFrame:
    """One entry on the context stack.

    Attributes:
        kind: The context kind.
        opened_at: Span of the fragment that opened this frame ((0, 0) for
            the top-level sentinel).
        function_name: For FUNCTION_ARGS frames, the function being called.
        closer: The delimiter that closes this frame (None for the sentinel).
    """

    kind: ContextKind
    opened_at: tuple[int, int] = (0, 0)
    function_name: str | None = None
    closer: str | None = None


class ContextStack:
    """Stack of context frames owned by a single classification pass.

    The top-level sentinel frame is pushed on construction and can never be
    popped, so current() always has an answer even for unbalanced input.
    """

    def __init__(self) -> None:
        self._frames: list[ContextFrame] = [ContextFrame(kind=ContextKind.TOP_LEVEL)]

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def depth(self) -> int:
        """Number of frames above the top-level sentinel."""
        return len(self._frames) - 1

    def current(self) -> ContextFrame:
        """Return the innermost frame."""
        return self._frames[-1]

    def push(self, frame: ContextFrame) -> None:
        """Push a new innermost frame."""
        self._frames.append(frame)

    def pop(self) -> ContextFrame | None:
        """Pop the innermost frame.

        Returns:
            The popped frame, or None if only the sentinel is left.
        """
        if len(self._frames) == 1:
            return None
        return self._frames.pop()

    def close(self, closer: str) -> ContextFrame | None:
        """Close the innermost frame opened with a matching delimiter.

        Frames above it (opened but never closed) are discarded too. A closer
        with no matching open frame leaves the stack untouched.

        Args:
            closer: The closing delimiter, e.g. ")" or "}".

        Returns:
            The closed frame, or None if nothing matched.
        """
        for index in range(len(self._frames) - 1, 0, -1):
            if self._frames[index].closer == closer:
                frame = self._frames[index]
                del self._frames[index:]
                return frame
        return None
