"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ARTICLE_URL = "https://www.example.com/blog/post"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def bare_page_html() -> str:
    return _read_fixture("bare_page.html")


@pytest.fixture
def profile_path() -> Path:
    return FIXTURES_DIR / "profile.yaml"


@pytest.fixture
def article_url() -> str:
    return ARTICLE_URL
