"""Asynchronous, cached font loading.

A repository loads one font at most once and hands the same in-flight
future to every caller that asks while the load is running. Rendering code
uses :attr:`FontRepository.cached`, which is ``None`` until the load has
finished, so it can draw an empty frame instead of blocking.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

import structlog

from icemold.exceptions import FontNotLoadedError
from icemold.io.font import Font

logger = structlog.get_logger(__name__)


class FontRepository:
    """Loads a font once and caches it.

    Example:
        repository = FontRepository.from_path(Path("NotoSansJP-Bold.otf"))
        future = repository.load_async()
        ...
        font = repository.cached  # None until the future completes
    """

    def __init__(self, loader: Callable[[], Font]) -> None:
        """Initialize the repository.

        Args:
            loader: Callable that loads and returns the font; may raise
        """
        self._loader = loader
        self._lock = threading.Lock()
        self._font: Font | None = None
        self._pending: Future[Font] | None = None
        self._executor: ThreadPoolExecutor | None = None

    @classmethod
    def from_path(cls, path: Path | str) -> "FontRepository":
        """Repository that loads the font file at ``path``."""
        return cls(lambda: Font.from_path(path))

    @property
    def cached(self) -> Font | None:
        """The loaded font, or None while it is missing or still loading."""
        return self._font

    def require(self) -> Font:
        """Return the loaded font.

        Raises:
            FontNotLoadedError: If loading has not finished
        """
        font = self._font
        if font is None:
            raise FontNotLoadedError()
        return font

    def load_async(self) -> "Future[Font]":
        """Start loading, or join the load that is already running.

        Returns:
            A completed future when the font is cached, otherwise the one
            in-flight future shared by all callers
        """
        with self._lock:
            if self._font is not None:
                done: Future[Font] = Future()
                done.set_result(self._font)
                return done

            if self._pending is None:
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=1, thread_name_prefix="icemold-font"
                    )
                logger.debug("Font load started")
                self._pending = self._executor.submit(self._load)
            return self._pending

    def load(self, timeout: float | None = None) -> Font:
        """Block until the font is loaded.

        Raises:
            FontLoadError: If the loader failed
            TimeoutError: If ``timeout`` expires first
        """
        return self.load_async().result(timeout=timeout)

    def _load(self) -> Font:
        try:
            font = self._loader()
        except Exception as e:
            with self._lock:
                self._pending = None
            logger.warning("Font load failed", error=str(e))
            raise

        with self._lock:
            if self._font is None:
                self._font = font
            self._pending = None
            logger.debug("Font load finished")
            return self._font

    def close(self) -> None:
        """Stop the loader thread; the cached font stays available."""
        with self._lock:
            executor = self._executor
            self._executor = None
        if executor is not None:
            executor.shutdown(wait=True)
