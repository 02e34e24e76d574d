"""Structural / semantic node patterns.

Patterns are plain values rather than selector strings so that the same
priority logic runs against any tree a host hands us (see
:mod:`readlater.tree`).  A small selector-like syntax is still accepted by
:meth:`NodePattern.parse` for configuration files:

    ``article``            tag name
    ``.post-content``      class token
    ``#content``           id
    ``[role=main]``        attribute equality (quotes optional)
    ``div.content``        tag combined with one class / id / attribute
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from readlater.tree import MarkupNode

_PATTERN_RE = re.compile(
    r"""^
    (?P<tag>[a-zA-Z][a-zA-Z0-9-]*)?
    (?:
        \.(?P<class_name>[\w-]+)
      | \#(?P<element_id>[\w-]+)
      | \[\s*(?P<attr_name>[\w:-]+)\s*=\s*["']?(?P<attr_value>[^"'\]]*)["']?\s*\]
    )?
    $""",
    re.VERBOSE,
)


@dataclass(frozen=True)
class NodePattern:
    """A conjunction of element constraints.  Unset fields match anything."""

    tag: str | None = None
    class_name: str | None = None
    element_id: str | None = None
    attr_name: str | None = None
    attr_value: str | None = None

    @classmethod
    def parse(cls, selector: str) -> NodePattern:
        """Build a pattern from a selector-like string (see module docstring)."""
        m = _PATTERN_RE.match(selector.strip())
        if not m or not any(m.groupdict().values()):
            raise ValueError(f"Unsupported node pattern: {selector!r}")
        tag = m.group("tag")
        return cls(
            tag=tag.lower() if tag else None,
            class_name=m.group("class_name"),
            element_id=m.group("element_id"),
            attr_name=m.group("attr_name").lower() if m.group("attr_name") else None,
            attr_value=m.group("attr_value"),
        )

    def matches(self, node: MarkupNode) -> bool:
        if self.tag is not None and node.tag != self.tag:
            return False
        if self.class_name is None and self.element_id is None and self.attr_name is None:
            return True
        attrs = node.attrs
        if self.class_name is not None and self.class_name not in attrs.get("class", "").split():
            return False
        if self.element_id is not None and attrs.get("id") != self.element_id:
            return False
        return self.attr_name is None or attrs.get(self.attr_name) == self.attr_value

    def __str__(self) -> str:
        out = self.tag or ""
        if self.class_name is not None:
            out += f".{self.class_name}"
        if self.element_id is not None:
            out += f"#{self.element_id}"
        if self.attr_name is not None:
            out += f'[{self.attr_name}="{self.attr_value}"]'
        return out


def parse_patterns(selectors: tuple[str, ...] | list[str]) -> tuple[NodePattern, ...]:
    return tuple(NodePattern.parse(s) for s in selectors)


# Content containers, strict priority order: the first pattern that matches
# anything wins, and within it the first match in document order.
CONTENT_PATTERNS: tuple[NodePattern, ...] = parse_patterns(
    (
        "[role=main]",
        "[itemprop=articleBody]",
        ".post-content",
        ".entry-content",
        ".article-content",
        "article",
        "main",
        ".content",
        "#content",
        ".main-content",
    ),
)

# Noise regions removed wholesale from the located subtree
NOISE_PATTERNS: tuple[NodePattern, ...] = parse_patterns(
    (
        "script",
        "style",
        "noscript",
        "nav",
        "header",
        "footer",
        "aside",
        "[role=navigation]",
        ".advertisement",
        ".ads",
        ".social-share",
        ".comments",
        "#comments",
        ".sidebar",
        "#sidebar",
        ".menu",
        ".navigation",
    ),
)
