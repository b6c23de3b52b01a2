"""
Shared test configuration for SchemeLens.

Provides sample scheme pages and pre-built pipeline components.
"""

import logging

import pytest
import structlog

from schemelens.config import ExtractionSettings, KeywordConfig
from schemelens.extractor.soup_adapter import SoupDocument

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(autouse=True)
def clear_log_context():
    """Keep bound structlog context from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def restore_logging():
    """configure_logging replaces the root handlers; put them back after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def default_readability_env(monkeypatch):
    """Pin the readability default regardless of the developer's shell."""
    monkeypatch.delenv("SCHEMELENS_USE_READABILITY", raising=False)


# ============================================================================
# Sample pages
# ============================================================================

ELIGIBILITY_PAGE = """
<html>
  <head><title>PM Kisan Samman Nidhi</title></head>
  <body>
    <h2>Eligibility</h2>
    <ul><li>Must be 18+ and an Indian citizen</li></ul>
    <a href="/apply">Apply Now</a>
  </body>
</html>
"""

FULL_SCHEME_PAGE = """
<html>
  <head><title>State Scholarship Scheme 2024</title></head>
  <body>
    <nav><a href="/">Home</a> <a href="/about">About</a></nav>
    <h1>State Scholarship Scheme</h1>
    <p>The scheme supports students from low income families.</p>
    <h2>Who can apply</h2>
    <ul>
      <li>Applicants must be residents of the state.</li>
      <li>Family income should be below 2.5 lakh per year.</li>
      <li>Students enrolled in a recognised college are eligible.</li>
    </ul>
    <p>Eligible students can <a href="https://portal.example.gov.in/register">register online</a>.</p>
    <h2>Documents required</h2>
    <div class="documents-required">
      <ul>
        <li>Aadhar card</li>
        <li>Income certificate issued by the Tehsildar</li>
        <li>Passport size photo</li>
        <li>Residence proof</li>
      </ul>
    </div>
    <h2>Contact</h2>
    <p>Call 9876543210 or write to help@scholarship.gov.in</p>
    <a href="/contact">Contact us</a>
  </body>
</html>
"""

DIV_SOUP_SENTENCE = (
    "Farmers owning cultivable land in the state receive income support in three instalments every year "
)
DIV_SOUP_PAGE = (
    "<html><body><div>"
    + DIV_SOUP_SENTENCE * 10
    + "Applicants must hold land records in their own name.</div></body></html>"
)

PII_PAGE = """
<html><body>
  <h2>Eligibility</h2>
  <ul>
    <li>Eligible applicants can call 9876543210 for help</li>
    <li>Applicants may write to helpdesk@scheme.gov.in</li>
    <li>Applicants must quote Aadhar 1234 5678 9012</li>
  </ul>
</body></html>
"""

SPA_SHELL_PAGE = """<!doctype html>
<html><head><script src="/main.js"></script></head>
<body><app-root></app-root></body></html>
"""


@pytest.fixture
def eligibility_page() -> str:
    return ELIGIBILITY_PAGE


@pytest.fixture
def full_scheme_page() -> str:
    return FULL_SCHEME_PAGE


@pytest.fixture
def div_soup_page() -> str:
    return DIV_SOUP_PAGE


@pytest.fixture
def pii_page() -> str:
    return PII_PAGE


@pytest.fixture
def spa_shell_page() -> str:
    return SPA_SHELL_PAGE


# ============================================================================
# Components
# ============================================================================


@pytest.fixture
def settings() -> ExtractionSettings:
    return ExtractionSettings(use_readability=False)


@pytest.fixture
def keywords() -> KeywordConfig:
    return KeywordConfig()


@pytest.fixture
def make_document():
    """Factory parsing markup into a SoupDocument."""

    def _make(html: str) -> SoupDocument:
        return SoupDocument(html)

    return _make
