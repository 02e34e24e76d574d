"""readlater - pull the readable article out of a web page.

Quick usage::

    from readlater import parse

    result = parse(html, url="https://example.com/blog/some-post")
    print(result.title)
    print(result.summary)
    print(result.metadata.reading_time)

Honour a user's highlighted text instead of the detected body::

    result = parse(html, url=url, selection="just this paragraph")

Cheaper preview without word count or extended metadata::

    result = parse(html, url=url, fidelity="basic")

Per-site tuning from a YAML profile::

    from readlater import load_profile

    config = load_profile("profiles.yaml", url)
    result = parse(html, url=url, config=config)
"""

from readlater.items import ArticleMetadata, ExtractionResult, Fidelity, SelectionSpan
from readlater.profiles import ExtractorConfig, load_profile
from readlater.query import ExtractionUnavailable, extract, parse

__version__ = "0.1.0"
__all__ = [
    "ArticleMetadata",
    "ExtractionResult",
    "ExtractionUnavailable",
    "ExtractorConfig",
    "Fidelity",
    "SelectionSpan",
    "extract",
    "load_profile",
    "parse",
]
