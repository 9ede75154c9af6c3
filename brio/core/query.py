"""Category query parsing and snippet matching.

Query syntax: comma-separated terms. ``domain:category`` associates a domain
with a category; a bare ``category`` inherits the most recently seen domain
prefix, or is a wildcard if no domain has been seen yet. For example
``"messages:foundation, tests"`` means foundation and tests, both restricted
to the messages domain.
"""

import logging
from collections.abc import Mapping

from brio.domain.entities import CategoryQuery, TagMetadata

logger = logging.getLogger(__name__)


def parse_category_query(raw: str) -> CategoryQuery:
    """Parse a raw category filter string into a CategoryQuery.

    Repeated categories accumulate their domains. A wildcard appearance of a
    category (no domain in effect) accepts every domain, so it absorbs any
    domains given for that category elsewhere in the query.

    Args:
        raw: Filter string such as "messages:foundation,tests".

    Returns:
        Parsed query. An empty or blank string yields the empty
        (match-everything) query.
    """
    domains: dict[str, set[str]] = {}
    wildcards: set[str] = set()
    current_domain = ""

    for term in raw.split(","):
        term = term.strip()
        if not term:
            continue
        if ":" in term:
            domain, category = term.split(":", 1)
            current_domain = domain.strip()
            category = category.strip()
        else:
            category = term
        if not category:
            logger.debug("Ignoring query term %r without a category", term)
            continue

        domains.setdefault(category, set())
        if current_domain:
            domains[category].add(current_domain)
        else:
            wildcards.add(category)

    return CategoryQuery(
        entries={
            category: frozenset() if category in wildcards else frozenset(found)
            for category, found in domains.items()
        }
    )


def matches(categories: Mapping[str, frozenset[str]], query: CategoryQuery) -> bool:
    """Check whether snippet metadata satisfies a query.

    A single shared category is enough: either the query accepts any domain
    for it, or the query's domains intersect the snippet's domains.

    Args:
        categories: Snippet tag metadata (category -> domains).
        query: Parsed category query.

    Returns:
        True if the snippet should be included.
    """
    if query.is_empty:
        return True

    for category, snippet_domains in categories.items():
        wanted = query.domains_for(category)
        if wanted is None:
            continue
        if not wanted or wanted & snippet_domains:
            return True
    return False


def format_query(query: CategoryQuery) -> str:
    """Render a query for diagnostics, e.g. "foundation[messages], tests[*]"."""
    if query.is_empty:
        return "<all>"
    parts = []
    for category in sorted(query.categories):
        domains = query.domains_for(category) or frozenset()
        shown = ",".join(sorted(domains)) if domains else "*"
        parts.append(f"{category}[{shown}]")
    return ", ".join(parts)


def format_categories(categories: TagMetadata) -> str:
    """Render snippet metadata as "cat -> [d1 d2], other -> []"."""
    return ", ".join(
        f"{category} -> [{' '.join(sorted(categories[category]))}]"
        for category in sorted(categories)
    )
