"""
Path resolution against a design tree.

Two dialects are accepted:

- Shorthand component selectors: ``/components[id=table1]`` and
  ``/components[id=table1]/props``.
- JMESPath queries rooted at the design, e.g. ``styles`` or
  ``components[?id=='chart1']``. A leading JSONPath-style ``$`` root and
  simple ``[?(@.id=="x")]`` filters are rewritten to JMESPath first.

Query results are references into the searched tree, so callers may merge
into them in place.
"""

import re
from functools import lru_cache
from typing import Any, NamedTuple

import jmespath
from jmespath.exceptions import JMESPathError

from ..core.logging_config import get_logger

logger = get_logger(__name__)

_SHORTHAND = re.compile(r"^/components\[id=([^\]]+)\](/props)?$")
_JSONPATH_FILTER = re.compile(r"""\[\?\(@\.(\w+)\s*==\s*(['"])(.*?)\2\)\]""")


class ShorthandPath(NamedTuple):
    """Parsed ``/components[id=<id>]`` selector."""

    component_id: str
    props: bool


def parse_shorthand(path: str) -> ShorthandPath | None:
    """Parse a shorthand selector; None if ``path`` is not one."""
    match = _SHORTHAND.match(path.strip())
    if not match:
        return None
    component_id = match.group(1).strip().strip("'\"")
    if not component_id:
        return None
    return ShorthandPath(component_id=component_id, props=match.group(2) is not None)


def to_jmespath(path: str) -> str:
    """Normalize a JSONPath-flavored query into JMESPath."""
    expression = path.strip()
    if expression.startswith("$"):
        expression = expression[1:].lstrip(".")
    expression = _JSONPATH_FILTER.sub(lambda m: f"[?{m.group(1)}=='{m.group(3)}']", expression)
    return expression or "@"


@lru_cache(maxsize=256)
def _compile(expression: str) -> Any:
    return jmespath.compile(expression)


def query_first(path: str, tree: dict[str, Any]) -> Any:
    """
    Run a tree query and return the first match.

    A list result yields its first element; None or an empty list means no
    match.

    Raises:
        JMESPathError: If the query does not parse
    """
    result = _compile(to_jmespath(path)).search(tree)
    if isinstance(result, list):
        return result[0] if result else None
    return result


def find_component(tree: dict[str, Any], component_id: str) -> dict[str, Any] | None:
    for component in tree.get("components", []):
        if component.get("id") == component_id:
            return component
    return None


def resolve_component_id(path: str, tree: dict[str, Any]) -> str | None:
    """
    Resolve a path to the id of an existing component.

    Never raises: malformed queries and non-component matches yield None.
    """
    shorthand = parse_shorthand(path)
    if shorthand is not None:
        if find_component(tree, shorthand.component_id) is None:
            return None
        return shorthand.component_id

    try:
        node = query_first(path, tree)
    except JMESPathError as e:
        logger.debug("path_parse_failed", path=path, error=str(e))
        return None

    if isinstance(node, dict):
        component_id = node.get("id")
        if isinstance(component_id, str) and component_id:
            return component_id
    return None
