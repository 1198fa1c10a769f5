"""Hypermedia links, relation classification and id extraction."""

from __future__ import annotations

import re
from typing import Iterable, NamedTuple
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict

from .errors import UnresolvedLinkTemplate

REL_SELF = "self"
REL_FIRST = "first"
REL_PREVIOUS = "prev"
REL_NEXT = "next"
REL_LAST = "last"

# IANA registered relations rendered under the top-level ``links`` member.
CANONICAL_RELS: frozenset[str] = frozenset(
    {REL_SELF, REL_FIRST, REL_PREVIOUS, REL_NEXT, REL_LAST}
)

_TEMPLATE_EXPRESSION = re.compile(r"\{([?&]?)([^{}]+)\}")


class Link(BaseModel):
    """An immutable ``href`` + relation pair."""

    model_config = ConfigDict(frozen=True)

    href: str
    rel: str = REL_SELF

    @property
    def is_templated(self) -> bool:
        return bool(_TEMPLATE_EXPRESSION.search(self.href))

    @property
    def variables(self) -> list[str]:
        """Return template variable names in order of appearance."""
        names: list[str] = []
        for match in _TEMPLATE_EXPRESSION.finditer(self.href):
            names.extend(name.strip() for name in match.group(2).split(","))
        return names

    def with_rel(self, rel: str) -> Link:
        return Link(href=self.href, rel=rel)

    def with_self_rel(self) -> Link:
        return self.with_rel(REL_SELF)

    def expand(self, **values: object) -> Link:
        """Return a concrete link with template expressions substituted.

        Simple ``{var}`` expressions are required; ``{?a,b}`` and ``{&a,b}``
        query expressions drop variables that were not supplied.
        """
        if not self.is_templated:
            return self
        missing: list[str] = []

        def substitute(match: re.Match[str]) -> str:
            operator, names = match.group(1), [n.strip() for n in match.group(2).split(",")]
            if operator:
                pairs = [(name, values[name]) for name in names if values.get(name) is not None]
                if not pairs:
                    return ""
                return ("?" if operator == "?" else "&") + urlencode(pairs)
            parts = []
            for name in names:
                if values.get(name) is None:
                    missing.append(name)
                    continue
                parts.append(quote(str(values[name]), safe=""))
            return ",".join(parts)

        href = _TEMPLATE_EXPRESSION.sub(substitute, self.href)
        if missing:
            raise UnresolvedLinkTemplate(self.href, missing)
        return Link(href=href, rel=self.rel)


class OrganizedLinks(NamedTuple):
    """Links split into canonical relations and relationship relations."""

    canonical: list[Link]
    relationships: list[Link]


def organize_links(
    links: Iterable[Link], canonical_rels: frozenset[str] = CANONICAL_RELS
) -> OrganizedLinks:
    """Partition links by relation name, keeping input order in each half."""
    canonical: list[Link] = []
    relationships: list[Link] = []
    for link in links:
        if link.rel in canonical_rels:
            canonical.append(link)
        else:
            relationships.append(link)
    return OrganizedLinks(canonical, relationships)


def extract_id(links: Iterable[Link]) -> str | None:
    """Return the last path segment of the first ``self`` link, if any."""
    for link in links:
        if link.rel == REL_SELF:
            return link.expand().href.split("/")[-1]
    return None
