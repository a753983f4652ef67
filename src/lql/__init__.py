"""Lexical classifier for the LogScale query language.

This package splits LogScale queries into fragments and assigns each one a
semantic category for syntax highlighting, linting or formatting.

Query Language Examples:
    status=200                        - Filter: status is FILTER_KEY, 200 VALUE
    url=/login/i                      - Regex literal
    #repo=web | count()               - Tag filter piped into a function
    groupBy(field=host, function=count())
                                      - field is ARG_KEY, host VALUE
    duration := end - start           - Assignment
    status match { 200 => ok := true; * => ok := false }
                                      - Match body
    // comment, /* block comment */

Categories:
    FUNCTION, OPERATOR, FILTER_KEY, ARG_KEY, VALUE, REGEX, COMMENT, PLAIN
"""

from .classifier import classify, classify_query
from .context import ContextFrame, ContextKind, ContextStack
from .registry import CategoryRegistry, RegistryStore
from .scanner import Fragment, FragmentKind, scan
from .types import Category, ClassifiedToken

__version__ = "0.3.0"

__all__ = [
    # Scanner
    "scan",
    "Fragment",
    "FragmentKind",
    # Classifier
    "classify",
    "classify_query",
    "Category",
    "ClassifiedToken",
    # Context
    "ContextKind",
    "ContextFrame",
    "ContextStack",
    # Registry
    "CategoryRegistry",
    "RegistryStore",
]
