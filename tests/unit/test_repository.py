"""Unit tests for cached asynchronous font loading."""

import threading

import pytest

from icemold.exceptions import FontLoadError, FontNotLoadedError
from icemold.io import Font, FontRepository


class CountingLoader:
    """Loader that counts calls and can block until released."""

    def __init__(self, ttf_path, block: bool = False, failures: int = 0) -> None:
        self.ttf_path = ttf_path
        self.calls = 0
        self.failures = failures
        self.release = threading.Event()
        if not block:
            self.release.set()

    def __call__(self) -> Font:
        self.calls += 1
        self.release.wait(timeout=10)
        if self.failures:
            self.failures -= 1
            raise FontLoadError(str(self.ttf_path), "simulated failure")
        return Font.from_path(self.ttf_path)


@pytest.fixture
def repository_factory():
    """Build repositories and close them after the test."""
    created = []

    def make(loader):
        repository = FontRepository(loader)
        created.append(repository)
        return repository

    yield make
    for repository in created:
        repository.close()


class TestFontRepository:
    """Tests for FontRepository."""

    def test_not_cached_before_load(self, ttf_path, repository_factory):
        """Nothing is cached until a load has finished."""
        repository = repository_factory(CountingLoader(ttf_path))
        assert repository.cached is None
        with pytest.raises(FontNotLoadedError):
            repository.require()

    def test_load_caches_font(self, ttf_path, repository_factory):
        """A finished load is cached and later loads reuse it."""
        loader = CountingLoader(ttf_path)
        repository = repository_factory(loader)

        font = repository.load(timeout=10)
        assert repository.cached is font
        assert repository.require() is font
        assert repository.load(timeout=10) is font
        assert loader.calls == 1

    def test_completed_future_when_cached(self, ttf_path, repository_factory):
        """Callers after the load get an already completed future."""
        repository = repository_factory(CountingLoader(ttf_path))
        font = repository.load(timeout=10)

        future = repository.load_async()
        assert future.done()
        assert future.result() is font

    def test_concurrent_callers_share_future(self, ttf_path, repository_factory):
        """Callers during a running load join the same future."""
        loader = CountingLoader(ttf_path, block=True)
        repository = repository_factory(loader)

        first = repository.load_async()
        second = repository.load_async()
        assert first is second
        assert repository.cached is None

        loader.release.set()
        assert first.result(timeout=10) is repository.cached
        assert loader.calls == 1

    def test_failure_propagates(self, ttf_path, repository_factory):
        """Loader errors reach the caller and nothing is cached."""
        repository = repository_factory(CountingLoader(ttf_path, failures=1))
        with pytest.raises(FontLoadError):
            repository.load(timeout=10)
        assert repository.cached is None

    def test_retry_after_failure(self, ttf_path, repository_factory):
        """A failed load can be retried with a fresh load."""
        loader = CountingLoader(ttf_path, failures=1)
        repository = repository_factory(loader)

        with pytest.raises(FontLoadError):
            repository.load(timeout=10)
        font = repository.load(timeout=10)
        assert repository.cached is font
        assert loader.calls == 2

    def test_from_path(self, ttf_path):
        """The path constructor loads the font file."""
        repository = FontRepository.from_path(ttf_path)
        try:
            font = repository.load(timeout=10)
            assert font.family_name == "Icemold Test"
        finally:
            repository.close()

    def test_from_path_missing_file(self, tmp_path):
        """A missing file surfaces as FontLoadError."""
        repository = FontRepository.from_path(tmp_path / "missing.otf")
        try:
            with pytest.raises(FontLoadError):
                repository.load(timeout=10)
        finally:
            repository.close()

    def test_close_keeps_cache(self, ttf_path):
        """Closing stops the worker but the cached font stays."""
        repository = FontRepository(CountingLoader(ttf_path))
        font = repository.load(timeout=10)
        repository.close()
        assert repository.cached is font
        repository.close()
