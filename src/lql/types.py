"""Output types of the classifier."""

from dataclasses import dataclass
from enum import Enum

from .context import ContextKind


class Category(Enum):
    """Semantic categories assigned to fragments.

    The values double as keys into highlighting.CATEGORY_STYLES.
    """

    FUNCTION = "function"  # groupBy( ... the name of a called function
    OPERATOR = "operator"  # = != := >= | and or not
    FILTER_KEY = "filter_key"  # status in status=200
    ARG_KEY = "arg_key"  # field in groupBy(field=host)
    VALUE = "value"  # 200 in status=200
    REGEX = "regex"  # /error/i
    COMMENT = "comment"  # // ... and /* ... */
    PLAIN = "plain"  # Everything else that is not whitespace


@dataclass(frozen=True)
class ClassifiedToken:
    """A classified span of the input.

    Attributes:
        start: Offset of the first character.
        end: Offset one past the last character.
        category: The semantic category.
        raw_fragment_index: Index of the source fragment in the scanner output
            (whitespace fragments included).
        text: Copy of the classified text.
        context: The context kind that was active when this token was read.
        function_name: The enclosing function call, if any.
    """

    start: int
    end: int
    category: Category
    raw_fragment_index: int
    text: str = ""
    context: ContextKind = ContextKind.TOP_LEVEL
    function_name: str | None = None

    @property
    def span(self) -> tuple[int, int]:
        """The (start, end) offsets of this token."""
        return (self.start, self.end)
