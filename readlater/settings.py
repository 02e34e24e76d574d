"""Default extraction settings.

Every value here can be overridden per call through
:class:`readlater.profiles.ExtractorConfig` or per site through a YAML
profile (see :func:`readlater.profiles.load_profile`).
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Reading time
# ---------------------------------------------------------------------------
WORDS_PER_MINUTE = 200

# Zero-word content still reports "1 min read"
MIN_READING_MINUTES = 1

# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
SUMMARY_LENGTH = 200
ELLIPSIS = "..."

# ---------------------------------------------------------------------------
# Title
# ---------------------------------------------------------------------------
UNTITLED = "Untitled Page"

# ---------------------------------------------------------------------------
# Published date sanity window (rejects epoch defaults and typos)
# ---------------------------------------------------------------------------
MIN_PUBLISHED_YEAR = 1990
MAX_PUBLISHED_YEAR = 2099

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
DEFAULT_PARSER = "lxml"
