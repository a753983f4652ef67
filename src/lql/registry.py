"""Registry of known function names and operators.

A CategoryRegistry is an immutable value. Updating the function list means
building a new registry and publishing it through a RegistryStore, so a
classification pass running on another thread never sees a half-updated
registry.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from threading import Lock

from .constants import BUILTIN_FUNCTIONS, CONNECTIVES, OPERATORS, WORD_OPERATORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryRegistry:
    """Known function names and operators.

    Attributes:
        functions: Case-sensitive function names (e.g. "groupBy", "math:abs").
        operators: Operator strings ordered longest first.
        word_operators: Keyword operators, compared case-insensitively.
        connectives: Operators that join clauses rather than compare a field
            with a value.
    """

    functions: frozenset[str] = frozenset()
    operators: tuple[str, ...] = OPERATORS
    word_operators: frozenset[str] = WORD_OPERATORS
    connectives: frozenset[str] = CONNECTIVES

    def __post_init__(self) -> None:
        # Longest-first is what makes match_operator() a longest match
        ordered = tuple(sorted(self.operators, key=len, reverse=True))
        object.__setattr__(self, "operators", ordered)
        object.__setattr__(self, "functions", frozenset(self.functions))

    @classmethod
    def default(cls) -> "CategoryRegistry":
        """Build a registry with the built-in LogScale function list."""
        return cls(functions=BUILTIN_FUNCTIONS)

    @classmethod
    def empty(cls) -> "CategoryRegistry":
        """Build a registry with operators but no function names."""
        return cls()

    def with_functions(self, names: Iterable[str]) -> "CategoryRegistry":
        """Return a copy of this registry with a different function list."""
        return CategoryRegistry(
            functions=frozenset(names),
            operators=self.operators,
            word_operators=self.word_operators,
            connectives=self.connectives,
        )

    def contains_function(self, name: str) -> bool:
        """Check if name is a known function."""
        return name in self.functions

    def match_operator(self, text: str, offset: int = 0) -> tuple[str, int] | None:
        """Find the longest operator starting at offset.

        Args:
            text: Text to match against.
            offset: Position in text to match at.

        Returns:
            Tuple of (operator, length), or None if no operator starts there.
        """
        for op in self.operators:
            if text.startswith(op, offset):
                return op, len(op)
        return None

    def is_operator(self, text: str) -> bool:
        """Check if text, as a whole, is an operator."""
        if text.lower() in self.word_operators:
            return True
        match = self.match_operator(text)
        return match is not None and match[1] == len(text)

    def is_comparison(self, text: str) -> bool:
        """Check if text is an operator that compares a field with a value."""
        return self.is_operator(text) and text.lower() not in self.connectives


class RegistryStore:
    """Holds the current registry for concurrent classification passes.

    Readers call current() once per pass and keep using that registry;
    publish() swaps in a fully built replacement.
    """

    def __init__(self, registry: CategoryRegistry | None = None) -> None:
        """Initialize the store.

        Args:
            registry: Initial registry (default: the built-in registry).
        """
        self._lock = Lock()
        self._registry = registry if registry is not None else CategoryRegistry.default()

    def current(self) -> CategoryRegistry:
        """Return the registry currently published."""
        return self._registry

    def publish(self, registry: CategoryRegistry) -> None:
        """Replace the current registry."""
        with self._lock:
            self._registry = registry
        logger.debug(f"Published registry with {len(registry.functions)} functions")

    def reload(self, loader: Callable[[], CategoryRegistry]) -> CategoryRegistry:
        """Build a new registry with loader and publish it.

        Concurrent reloads are serialized so the last one to finish wins.

        Args:
            loader: Callable returning a fully built registry.

        Returns:
            The newly published registry.
        """
        with self._lock:
            registry = loader()
            self._registry = registry
        logger.debug(f"Reloaded registry with {len(registry.functions)} functions")
        return registry
