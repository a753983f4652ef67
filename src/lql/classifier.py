"""Classifier assigning semantic categories to scanner fragments.

Rules, evaluated in order for each fragment (first match wins):

    1. Comment                                   -> COMMENT
    2. Regex literal                             -> REGEX
    3. Known function name followed by "("       -> FUNCTION
    4. Operator (longest match, or and/or/not)   -> OPERATOR
    5. Anything inside a match/case body         -> PLAIN
    6. Word followed by a comparison operator    -> FILTER_KEY at top level,
                                                    ARG_KEY for "=" inside a
                                                    function call
    7. Number, string or word after a comparison -> VALUE
    8. Everything else                           -> PLAIN

Whitespace and newlines are skipped when looking at the previous/next
fragment, and produce no tokens. The context stack is what tells
"status=200" (a filter) apart from "count(by=1)" (a keyword argument).
"""

from collections.abc import Iterable

from .constants import MATCH_OPENERS
from .context import ContextFrame, ContextKind, ContextStack
from .registry import CategoryRegistry
from .scanner import Fragment, FragmentKind, scan
from .types import Category, ClassifiedToken

_SKIPPED_KINDS = frozenset({FragmentKind.WHITESPACE, FragmentKind.NEWLINE})

_VALUE_KINDS = frozenset(
    {FragmentKind.NUMBER, FragmentKind.QUOTED_STRING, FragmentKind.WORD}
)


def _is_punct(fragment: Fragment | None, text: str) -> bool:
    """Check if fragment is the punctuation text."""
    return (
        fragment is not None
        and fragment.kind is FragmentKind.PUNCT
        and fragment.text == text
    )


class _ClassificationPass:
    """A single left-to-right pass over the fragments of one query."""

    def __init__(
        self,
        fragments: list[Fragment],
        registry: CategoryRegistry,
        stack: ContextStack,
    ) -> None:
        self.registry = registry
        self.stack = stack
        self.significant = [
            (index, fragment)
            for index, fragment in enumerate(fragments)
            if fragment.kind not in _SKIPPED_KINDS
        ]

    def _is_operator(self, fragment: Fragment | None) -> bool:
        return (
            fragment is not None
            and fragment.kind in (FragmentKind.PUNCT, FragmentKind.WORD)
            and self.registry.is_operator(fragment.text)
        )

    def _is_comparison(self, fragment: Fragment | None) -> bool:
        return (
            fragment is not None
            and self._is_operator(fragment)
            and self.registry.is_comparison(fragment.text)
        )

    def _categorize(
        self,
        fragment: Fragment,
        previous: Fragment | None,
        following: Fragment | None,
        frame: ContextFrame,
    ) -> Category:
        """Apply the classification rules to one fragment."""
        kind = fragment.kind

        if kind is FragmentKind.COMMENT:
            return Category.COMMENT
        if kind is FragmentKind.REGEX_LITERAL:
            return Category.REGEX
        if (
            kind is FragmentKind.WORD
            and self.registry.contains_function(fragment.text)
            and _is_punct(following, "(")
        ):
            return Category.FUNCTION
        if self._is_operator(fragment):
            return Category.OPERATOR

        # No grammar for match bodies yet, so keys and values stay plain there
        if frame.kind is ContextKind.MATCH_BODY:
            return Category.PLAIN

        if kind is FragmentKind.WORD and self._is_comparison(following):
            if frame.kind is ContextKind.TOP_LEVEL:
                return Category.FILTER_KEY
            if _is_punct(following, "="):
                return Category.ARG_KEY

        if kind in _VALUE_KINDS and self._is_comparison(previous):
            return Category.VALUE

        return Category.PLAIN

    def _update_context(self, fragment: Fragment, previous: Fragment | None) -> None:
        """Push or pop context frames for bracket fragments."""
        if fragment.kind is not FragmentKind.PUNCT:
            return
        frame = self.stack.current()
        previous_word = (
            previous.text
            if previous is not None and previous.kind is FragmentKind.WORD
            else None
        )

        if fragment.text == "(":
            if previous_word is not None and self.registry.contains_function(
                previous_word
            ):
                self.stack.push(
                    ContextFrame(
                        kind=ContextKind.FUNCTION_ARGS,
                        opened_at=fragment.span,
                        function_name=previous_word,
                        closer=")",
                    )
                )
            else:
                # Grouping parens keep the enclosing context
                self.stack.push(
                    ContextFrame(
                        kind=frame.kind,
                        opened_at=fragment.span,
                        function_name=frame.function_name,
                        closer=")",
                    )
                )
        elif fragment.text == "{":
            if previous_word is not None and previous_word.lower() in MATCH_OPENERS:
                kind = ContextKind.MATCH_BODY
            else:
                # Sub-query, e.g. join({ ... }) or function={ count() }
                kind = ContextKind.TOP_LEVEL
            self.stack.push(
                ContextFrame(kind=kind, opened_at=fragment.span, closer="}")
            )
        elif fragment.text in (")", "}"):
            self.stack.close(fragment.text)

    def run(self) -> list[ClassifiedToken]:
        """Classify every non-whitespace fragment."""
        tokens: list[ClassifiedToken] = []
        previous: Fragment | None = None

        for position, (index, fragment) in enumerate(self.significant):
            following = (
                self.significant[position + 1][1]
                if position + 1 < len(self.significant)
                else None
            )
            frame = self.stack.current()
            category = self._categorize(fragment, previous, following, frame)
            tokens.append(
                ClassifiedToken(
                    start=fragment.start,
                    end=fragment.end,
                    category=category,
                    raw_fragment_index=index,
                    text=fragment.text,
                    context=frame.kind,
                    function_name=frame.function_name,
                )
            )
            self._update_context(fragment, previous)
            previous = fragment

        return tokens


def classify(
    fragments: Iterable[Fragment],
    registry: CategoryRegistry | None = None,
    *,
    stack: ContextStack | None = None,
) -> list[ClassifiedToken]:
    """Classify scanner fragments.

    Never raises for malformed input: unbalanced brackets are ignored and
    unterminated literals were already absorbed by the scanner.

    Args:
        fragments: Fragments from scan(), in document order.
        registry: Function/operator registry (default: built-in registry).
        stack: Context stack to use. Pass one in to inspect the context left
            behind after the pass; by default a fresh stack is used.

    Returns:
        One ClassifiedToken per non-whitespace fragment, in document order.
    """
    if registry is None:
        registry = CategoryRegistry.default()
    if stack is None:
        stack = ContextStack()
    return _ClassificationPass(list(fragments), registry, stack).run()


def classify_query(
    text: str,
    registry: CategoryRegistry | None = None,
    *,
    stack: ContextStack | None = None,
) -> list[ClassifiedToken]:
    """Scan and classify query text in one call."""
    return classify(scan(text), registry, stack=stack)
