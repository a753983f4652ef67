"""Query syntax highlighting with Rich.

This module maps classifier categories to Rich styles and builds styled
Text objects for display in a terminal or a Textual widget.
"""

import logging

from rich.text import Text

from .classifier import classify_query
from .function_list import load_registry
from .registry import CategoryRegistry, RegistryStore
from .types import Category

logger = logging.getLogger(__name__)

# Category value to Rich style mapping
CATEGORY_STYLES: dict[str, str] = {
    Category.FUNCTION.value: "bold #87AFFF",
    Category.OPERATOR.value: "bold #FF5F5F",
    Category.FILTER_KEY.value: "bold #87D7FF",
    Category.ARG_KEY.value: "#87D7FF",
    Category.VALUE.value: "#D7AF5F",
    Category.REGEX.value: "#00D7AF",
    Category.COMMENT.value: "italic #808080",
    Category.PLAIN.value: "",
}


def build_query_text(
    query: str,
    registry: CategoryRegistry | None = None,
    styles: dict[str, str] | None = None,
) -> Text:
    """Build a styled Text object for the query.

    The text content is the query itself (whitespace and newlines included);
    each classified token is styled according to its category.

    Args:
        query: The query string to highlight.
        registry: Function/operator registry (default: built-in registry).
        styles: Overrides for CATEGORY_STYLES, keyed by category value.

    Returns:
        The styled Text.
    """
    merged_styles = {**CATEGORY_STYLES, **(styles or {})}
    text = Text(query)
    for token in classify_query(query, registry):
        style = merged_styles.get(token.category.value, "")
        if style:
            text.stylize(style, token.start, token.end)
    return text


class QueryHighlighter:
    """Highlighter for repeated use, e.g. re-highlighting on every keystroke.

    The function list can be reloaded while highlighting runs on other
    threads; each call uses whichever registry was published when it started.
    """

    def __init__(
        self,
        store: RegistryStore | None = None,
        styles: dict[str, str] | None = None,
    ) -> None:
        """Initialize the highlighter.

        Args:
            store: Registry store (default: a store with the built-in registry).
            styles: Overrides for CATEGORY_STYLES.
        """
        self.store = store if store is not None else RegistryStore()
        self.styles = styles or {}

    def highlight(self, query: str) -> Text:
        """Build a styled Text object for the query."""
        return build_query_text(query, self.store.current(), self.styles)

    def reload_functions(self, path: str) -> CategoryRegistry:
        """Replace the function list with the one in path.

        Args:
            path: Path to a YAML function list.

        Returns:
            The newly published registry.
        """
        logger.info(f"Reloading function list from {path}")
        return self.store.reload(lambda: load_registry(path))
