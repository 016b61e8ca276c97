"""Node name helpers.

Content repositories require node names to be unique among siblings. These
helpers turn a human supplied name ("My Fancy News!") into a valid node name
and find the first free variant of it.
"""

import re
import unicodedata
import uuid
from typing import Callable, Collection, Optional

_INVALID_CHARS = re.compile(r"[^a-z0-9\-]+")
_RANDOM_PREFIX = "node-"


def render_valid_node_name(name: str) -> str:
    """Convert an arbitrary string into a valid node name.

    Lowercases, transliterates to ASCII and collapses every run of characters
    outside ``[a-z0-9-]`` into a single dash.

    Example:
        >>> render_valid_node_name("Über uns / Team")
        'uber-uns-team'
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    return _INVALID_CHARS.sub("-", ascii_name).strip("-")


def _random_node_name() -> str:
    return _RANDOM_PREFIX + uuid.uuid4().hex[:13]


def generate_unique_node_name(existing_names: Collection[str],
                              ideal_name: Optional[str] = None,
                              random_name: Callable[[], str] = _random_node_name) -> str:
    """Return a node name that does not collide with ``existing_names``.

    Without an ideal name (or one that renders to nothing) a random
    ``node-...`` name is drawn until it is free. Otherwise the rendered ideal
    name is used as is, or suffixed ``-1``, ``-2``, ... on collision.

    Args:
        existing_names: Names of the parent's current children
        ideal_name: Preferred name, may be None
        random_name: Generator for random names (overridable for tests)

    Returns:
        A name unique among existing_names
    """
    taken = set(existing_names)
    base = render_valid_node_name(ideal_name) if ideal_name else ""

    if not base:
        candidate = random_name()
        while candidate in taken:
            candidate = random_name()
        return candidate

    if base not in taken:
        return base

    suffix = 1
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
