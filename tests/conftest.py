"""
Shared fixtures for the SecHub test suite.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sechub.config import Config
from sechub.extractor.models import ExtractionResult
from sechub.extractor.pipeline import ExtractionPipeline

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests spanning several components")


# ============================================================================
# Clock
# ============================================================================


class FakeClock:
    """Manually advanced stand-in for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_config():
    """Default configuration with console logging."""
    return Config()


# ============================================================================
# Pipeline Doubles
# ============================================================================


def _make_result(length: int = 800, title: str = "Ransomware gang leaks data") -> ExtractionResult:
    return ExtractionResult(content="x" * length, title=title, success=True)


@pytest.fixture
def make_result():
    """Factory for successful results of a given content length."""
    return _make_result


@pytest.fixture
def stub_pipeline():
    """Pipeline double that returns a long successful result."""
    pipeline = MagicMock(spec=ExtractionPipeline)
    pipeline.extract_with_strategies = AsyncMock(return_value=_make_result())
    pipeline.get_metrics.return_value = {}
    return pipeline


# ============================================================================
# HTML Fixtures
# ============================================================================

ARTICLE_PARAGRAPHS = [
    "Researchers disclosed a critical remote code execution flaw in a widely deployed VPN appliance "
    "that attackers have been exploiting since early last month to gain initial access to corporate networks.",
    "The vulnerability stems from improper validation of session tokens in the web management interface, "
    "allowing unauthenticated requests to reach privileged handlers and execute arbitrary commands.",
    "Incident responders observed the operators deploying web shells, harvesting credentials from memory "
    "and moving laterally to domain controllers within hours of the initial compromise.",
    "The vendor has released patched firmware and urges customers to upgrade immediately, rotate all "
    "credentials stored on the device and review logs for the indicators of compromise listed in the advisory.",
]


@pytest.fixture
def article_html():
    """Page whose article body is comfortably above every length gate."""
    paragraphs = "\n".join(f"<p>{p}</p>" for p in ARTICLE_PARAGRAPHS)
    return f"""
    <!DOCTYPE html>
    <html>
    <head><title>VPN Zero-Day Exploited in the Wild</title></head>
    <body>
        <nav><a href="/">Home</a> <a href="/news">News</a></nav>
        <article class="post">
            <h1>VPN Zero-Day Exploited in the Wild</h1>
            {paragraphs}
        </article>
        <footer>Copyright SecNews</footer>
    </body>
    </html>
    """


@pytest.fixture
def short_html():
    """Page with an article body of roughly 300 characters."""
    return f"""
    <html>
    <head><title>Patch Tuesday Notes</title></head>
    <body>
        <article><p>{ARTICLE_PARAGRAPHS[0]}</p><p>{ARTICLE_PARAGRAPHS[1][:90]}</p></article>
    </body>
    </html>
    """


@pytest.fixture
def empty_html():
    """Page with nothing any selector would accept."""
    return "<html><head><title>Nothing here</title></head><body><div>Tiny.</div></body></html>"
