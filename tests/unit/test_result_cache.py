"""
Unit tests for the extraction result cache.
"""

import pytest
from sechub.cache.result_cache import ResultCache
from sechub.extractor.models import ExtractionResult

DAY = 24 * 60 * 60
HALF_HOUR = 30 * 60


@pytest.fixture
def cache(clock):
    return ResultCache(success_ttl=DAY, failure_ttl=HALF_HOUR, clock=clock)


@pytest.fixture
def success():
    return ExtractionResult(content="body", title="t", success=True)


@pytest.fixture
def failure():
    return ExtractionResult.failure("All extraction strategies failed")


@pytest.mark.unit
class TestResultCache:
    def test_miss(self, cache):
        assert cache.get("https://github.com/a") is None

    def test_success_ttl(self, cache, clock, success):
        entry = cache.set("https://github.com/a", success)
        assert entry.expires_at == clock.now + DAY

        clock.advance(DAY - 1)
        assert cache.get("https://github.com/a") is success

        clock.advance(1)
        assert cache.get("https://github.com/a") is None
        assert "https://github.com/a" not in cache

    def test_failure_ttl(self, cache, clock, failure):
        cache.set("https://github.com/b", failure)

        clock.advance(HALF_HOUR - 1)
        assert cache.get("https://github.com/b") is failure

        clock.advance(1)
        assert cache.get("https://github.com/b") is None
        assert len(cache) == 0

    def test_overwrite_replaces_entry(self, cache, clock, success, failure):
        cache.set("https://github.com/c", failure)
        clock.advance(10)
        cache.set("https://github.com/c", success)

        assert cache.get("https://github.com/c") is success
        assert len(cache) == 1

    def test_cleanup_on_empty_cache(self, cache):
        assert cache.cleanup() == 0
        assert cache.cleanup() == 0

    def test_cleanup_removes_only_expired(self, cache, clock, success, failure):
        cache.set("https://github.com/fail", failure)
        cache.set("https://github.com/ok", success)
        clock.advance(HALF_HOUR - 5)
        cache.set("https://github.com/fail-later", failure)
        clock.advance(5)

        # fail expires exactly now; fail-later and ok are still live
        assert cache.cleanup() == 1
        assert "https://github.com/fail" not in cache
        assert "https://github.com/fail-later" in cache
        assert "https://github.com/ok" in cache

        assert cache.cleanup() == 0
        assert len(cache) == 2

    def test_clear(self, cache, success):
        cache.set("https://github.com/a", success)
        cache.clear()
        assert len(cache) == 0
