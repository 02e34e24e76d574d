"""Markup tree contract and parser adapters.

The extraction engine never talks to a parser directly.  It walks any object
that satisfies :class:`MarkupNode`: a tag name, a string attribute mapping,
ordered element children, and a rendered plain-text view.  Pruning
additionally needs :meth:`MarkupNode.clone` and :meth:`MarkupNode.detach`.

Two adapters ship with the package:

* :class:`SoupNode`  - wraps a BeautifulSoup ``Tag`` (or the ``BeautifulSoup``
  document object itself).
* :class:`LxmlNode`  - wraps an ``lxml.html`` element.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from lxml import etree
from lxml import html as lxml_html

# Elements whose contents are never rendered as visible text
_INVISIBLE_TAGS: frozenset[str] = frozenset(
    {
        "head",
        "title",
        "meta",
        "link",
        "script",
        "style",
        "noscript",
        "template",
        "iframe",
        "object",
        "svg",
    },
)

# Elements that start a new line when rendered
_BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "dd", "details",
        "dialog", "div", "dl", "dt", "fieldset", "figcaption", "figure",
        "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6", "header",
        "hgroup", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
        "summary", "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    },
)

_DISPLAY_NONE_RE = re.compile(r"display\s*:\s*none", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")
_BLOCK_END = object()

PARSER_BACKENDS: tuple[str, ...] = ("lxml", "html.parser", "lxml-etree")


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

@runtime_checkable
class MarkupNode(Protocol):
    """A read-only view of one element in a parsed markup tree."""

    @property
    def tag(self) -> str:
        """Lower-case element name (``"div"``, ``"meta"`` ...)."""
        ...

    @property
    def attrs(self) -> Mapping[str, str]:
        """Attribute name -> string value.  Multi-valued attributes are space-joined."""
        ...

    def children(self) -> Sequence[MarkupNode]:
        """Element children in document order (text nodes excluded)."""
        ...

    def text(self) -> str:
        """Visible text of this subtree, whitespace-collapsed, one line per block."""
        ...

    def clone(self) -> MarkupNode:
        """Return a detached deep copy of this subtree."""
        ...

    def detach(self) -> None:
        """Remove this element (and its subtree) from its parent."""
        ...


def iter_elements(node: MarkupNode, *, include_self: bool = False) -> Iterator[MarkupNode]:
    """Yield the descendants of *node* in document (pre-)order."""
    if include_self:
        yield node
    stack = list(reversed(node.children()))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def find_first(node: MarkupNode, tag: str, *, include_self: bool = False) -> MarkupNode | None:
    """Return the first element named *tag* under *node*, or None."""
    for el in iter_elements(node, include_self=include_self):
        if el.tag == tag:
            return el
    return None


def _collapse_lines(raw: str) -> str:
    """Trim each rendered line, collapse inner spaces and drop blank lines.

    Source newlines were already folded into spaces; only block boundaries
    and ``<br>`` produce the "\\n" separators seen here.
    """
    lines = (" ".join(line.split()) for line in raw.split("\n"))
    return "\n".join(line for line in lines if line)


def _is_hidden(attrs: Mapping[str, Any]) -> bool:
    if "hidden" in attrs:
        return True
    style = attrs.get("style")
    return bool(style) and bool(_DISPLAY_NONE_RE.search(str(style)))


# ---------------------------------------------------------------------------
# BeautifulSoup adapter
# ---------------------------------------------------------------------------

def _safe_str(val: Any) -> str:
    """Convert a BeautifulSoup attribute value (str | list | None) to str."""
    if val is None:
        return ""
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val)


class SoupNode:
    """:class:`MarkupNode` over a BeautifulSoup ``Tag``."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def element(self) -> Tag:
        return self._tag

    @property
    def tag(self) -> str:
        return (self._tag.name or "").lower()

    @property
    def attrs(self) -> Mapping[str, str]:
        return {str(k).lower(): _safe_str(v) for k, v in self._tag.attrs.items()}

    def children(self) -> list[SoupNode]:
        return [SoupNode(c) for c in self._tag.children if isinstance(c, Tag)]

    def text(self) -> str:
        parts: list[str] = []
        # Explicit stack so nesting depth is not bound by the recursion limit.
        # _BLOCK_END closes a block element once its contents are rendered.
        stack: list[Any] = list(reversed(self._tag.contents))
        while stack:
            item = stack.pop()
            if item is _BLOCK_END:
                parts.append("\n")
            elif isinstance(item, PreformattedString):
                # comments, CDATA, doctype, processing instructions
                continue
            elif isinstance(item, NavigableString):
                parts.append(_WS_RE.sub(" ", str(item)))
            elif isinstance(item, Tag):
                name = (item.name or "").lower()
                if name in _INVISIBLE_TAGS or _is_hidden(item.attrs):
                    continue
                if name == "br":
                    parts.append("\n")
                    continue
                if name in _BLOCK_TAGS:
                    parts.append("\n")
                    stack.append(_BLOCK_END)
                stack.extend(reversed(item.contents))
        return _collapse_lines("".join(parts))

    def clone(self) -> SoupNode:
        # Tag.__copy__ deep-copies the whole subtree (non-recursively since bs4 4.12.1)
        return SoupNode(copy.copy(self._tag))

    def detach(self) -> None:
        self._tag.decompose()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupNode) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"SoupNode(<{self.tag}>)"


# ---------------------------------------------------------------------------
# lxml adapter
# ---------------------------------------------------------------------------

class LxmlNode:
    """:class:`MarkupNode` over an ``lxml.html`` element."""

    __slots__ = ("_el",)

    def __init__(self, element: lxml_html.HtmlElement) -> None:
        self._el = element

    @property
    def element(self) -> lxml_html.HtmlElement:
        return self._el

    @property
    def tag(self) -> str:
        tag = self._el.tag
        return tag.lower() if isinstance(tag, str) else ""

    @property
    def attrs(self) -> Mapping[str, str]:
        return {str(k).lower(): str(v) for k, v in self._el.attrib.items()}

    def children(self) -> list[LxmlNode]:
        # Comments and processing instructions have a non-string .tag
        return [LxmlNode(c) for c in self._el if isinstance(c.tag, str)]

    def text(self) -> str:
        parts: list[str] = []
        # Text runs are plain str on the stack; elements are expanded in place.
        stack: list[Any] = self._pending(self._el)
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            name = item.tag.lower()
            if name == "br":
                parts.append("\n")
            elif name not in _INVISIBLE_TAGS and not _is_hidden(item.attrib):
                if name in _BLOCK_TAGS:
                    parts.append("\n")
                    stack.append("\n")
                stack.extend(self._pending(item))
        return _collapse_lines("".join(parts))

    @staticmethod
    def _pending(el: Any) -> list[Any]:
        """Return the inner text runs and child elements of *el*, reversed."""
        items: list[Any] = []
        if el.text:
            items.append(_WS_RE.sub(" ", el.text))
        for child in el:
            if isinstance(child.tag, str):
                items.append(child)
            # tail text belongs to the parent, even after a hidden element
            if child.tail:
                items.append(_WS_RE.sub(" ", child.tail))
        items.reverse()
        return items

    def clone(self) -> LxmlNode:
        el = copy.deepcopy(self._el)
        el.tail = None
        return LxmlNode(el)

    def detach(self) -> None:
        # drop_tree keeps the element's tail text in place
        self._el.drop_tree()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LxmlNode) and other._el is self._el

    def __hash__(self) -> int:
        return id(self._el)

    def __repr__(self) -> str:
        return f"LxmlNode(<{self.tag}>)"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def as_node(document: Any) -> MarkupNode:
    """Wrap a parser object in the matching adapter.

    Accepts an existing :class:`MarkupNode`, a BeautifulSoup ``Tag`` /
    ``BeautifulSoup`` object, or an ``lxml`` element.  Anything else raises
    ``TypeError``.
    """
    if isinstance(document, (SoupNode, LxmlNode)):
        return document
    if isinstance(document, Tag):
        return SoupNode(document)
    if isinstance(document, etree._Element):
        return LxmlNode(document)
    if isinstance(document, MarkupNode):
        return document
    raise TypeError(f"Unsupported document type: {type(document).__name__}")


def parse_document(html: str, parser: str = "lxml") -> MarkupNode:
    """Parse *html* and return the document root as a :class:`MarkupNode`.

    Args:
        html:   Raw HTML string.
        parser: ``"lxml"`` or ``"html.parser"`` (BeautifulSoup backends) or
                ``"lxml-etree"`` (plain ``lxml.html`` tree).

    Raises:
        ValueError: On an unknown *parser* or a document lxml cannot parse.
    """
    if parser == "lxml-etree":
        # huge_tree lifts libxml2's 256-level nesting cap (to 2048); parsers
        # are not shared between threads, so one is built per call.
        etree_parser = lxml_html.HTMLParser(huge_tree=True)
        try:
            return LxmlNode(lxml_html.document_fromstring(html, parser=etree_parser))
        except etree.ParserError as exc:
            raise ValueError(f"Unparseable document: {exc}") from exc
    if parser in ("lxml", "html.parser"):
        return SoupNode(BeautifulSoup(html, parser))
    raise ValueError(f"Unknown parser {parser!r}; expected one of {PARSER_BACKENDS}")
