"""Loading and refreshing the list of known LogScale function names.

The list lives in a YAML file, either a bare list of names or a mapping with
a ``functions`` key:

    functions:
      - groupBy
      - math:abs

`lql functions refresh` rebuilds it by scraping the function table from the
LogScale documentation.
"""

import logging
import os
from collections.abc import Iterable

import yaml  # type: ignore[import-untyped]

from .constants import DEFAULT_REFERENCE_URL
from .registry import CategoryRegistry

logger = logging.getLogger(__name__)

USER_AGENT = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, "
        "like Gecko) Chrome/120.0 Safari/537.36"
    )
}

# Header of the reference table column holding the function signatures
_FUNCTION_HEADER = "Function"


class FunctionListError(ValueError):
    """Raised when a function list cannot be loaded or scraped."""


def strip_parameter_suffix(raw: str) -> str:
    """Strip the parameter list from a function signature.

    Args:
        raw: Signature as shown in the reference, e.g. "groupBy([field])".

    Returns:
        The bare function name, e.g. "groupBy".
    """
    paren = raw.find("(")
    if paren == -1:
        return raw.strip()
    return raw[:paren].strip()


def _dedupe(names: Iterable[str]) -> list[str]:
    """Drop empty and repeated names, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result


def parse_function_table(html: str) -> list[str]:
    """Extract function names from the LogScale function reference page.

    Every table whose header row has a "Function" column contributes the
    cells of that column.

    Args:
        html: The reference page HTML.

    Returns:
        Function names in page order, without duplicates.

    Raises:
        FunctionListError: If the page has no table with a Function column.
    """
    from bs4 import BeautifulSoup

    soup = BeautifulSoup(html, "html.parser")
    names: list[str] = []
    found_table = False

    for table in soup.find_all("table"):
        rows = table.find_all("tr")
        if not rows:
            continue
        headers = [
            cell.get_text(" ", strip=True) for cell in rows[0].find_all(["th", "td"])
        ]
        if _FUNCTION_HEADER not in headers:
            continue
        found_table = True
        column = headers.index(_FUNCTION_HEADER)
        for row in rows[1:]:
            cells = row.find_all(["td", "th"])
            if column < len(cells):
                names.append(strip_parameter_suffix(cells[column].get_text(strip=True)))

    if not found_table:
        raise FunctionListError(
            f"No table with a '{_FUNCTION_HEADER}' column found in reference page"
        )
    return _dedupe(names)


def fetch_function_names(url: str = DEFAULT_REFERENCE_URL, timeout: float = 30) -> list[str]:
    """Download the function reference and extract its function names.

    Args:
        url: URL of the function reference page.
        timeout: Request timeout in seconds.

    Returns:
        Function names in page order.

    Raises:
        FunctionListError: If the page cannot be fetched or parsed.
    """
    import requests

    logger.info(f"Fetching function reference from {url}")
    try:
        response = requests.get(url, headers=USER_AGENT, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FunctionListError(f"Could not fetch {url}: {e}") from e

    names = parse_function_table(response.text)
    logger.info(f"Found {len(names)} functions at {url}")
    return names


def load_function_names(path: str) -> frozenset[str]:
    """Load function names from a YAML file.

    Args:
        path: Path to the function list file ("~" is expanded).

    Returns:
        The set of function names.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FunctionListError: If the file is malformed.
    """
    path = os.path.expanduser(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Function list not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FunctionListError(f"Invalid YAML in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("functions")
    if not isinstance(data, list):
        raise FunctionListError(
            f"{path} must contain a list of names or a 'functions' list"
        )

    for name in data:
        if not isinstance(name, str):
            raise FunctionListError(
                f"Function names must be strings, got: {type(name)} ({name!r})"
            )
    return frozenset(strip_parameter_suffix(name) for name in data if name.strip())


def dump_function_names(names: Iterable[str], path: str) -> None:
    """Write function names to a YAML file, sorted.

    Args:
        names: Function names to write.
        path: Destination path ("~" is expanded). Parent directories are
            created as needed.
    """
    path = os.path.expanduser(path)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump({"functions": sorted(set(names))}, f, default_flow_style=False)


def load_registry(path: str) -> CategoryRegistry:
    """Build a registry from a function list file.

    A file that can't be read degrades to a registry without any function
    names, so no word is highlighted as a function.

    Args:
        path: Path to the function list file.

    Returns:
        The registry.
    """
    try:
        names = load_function_names(path)
    except (OSError, FunctionListError) as e:
        logger.warning(f"Could not load function list, highlighting no functions: {e}")
        return CategoryRegistry.empty()
    logger.debug(f"Loaded {len(names)} functions from {path}")
    return CategoryRegistry.default().with_functions(names)
