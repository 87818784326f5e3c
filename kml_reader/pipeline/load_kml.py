"""File loading with request-token sequencing.

Reading the input file is the only asynchronous step: the bytes are read
in a worker thread, then parsed synchronously. Each ``load()`` call takes
a new monotonic request token and commits its result only while that
token is still the latest, so a slow stale read can never overwrite the
state of a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from kml_reader.core.config import ReaderConfig, configure_logging
from kml_reader.core.constants import PARSE_FAILED_MESSAGE, READ_FAILED_MESSAGE
from kml_reader.core.exceptions import KmlReadError, ParseError
from kml_reader.models.document import KmlData
from kml_reader.pipeline.parse_kml import parse_kml, read_kml_bytes

logger = logging.getLogger("kml_reader.pipeline.load_kml")


class KmlLoader:
    """Holds the currently loaded document and the last user-facing error."""

    def __init__(self, config: ReaderConfig | None = None) -> None:
        """Create a loader.

        An explicit ``config`` also applies its ``log_level`` to the
        ``kml_reader`` logger; without one, logging is left to the host.
        """
        if config is not None:
            configure_logging(config.log_level)
        self._config = config or ReaderConfig()
        self._latest_token = 0
        self._current: KmlData | None = None
        self._error: str | None = None

    @property
    def current(self) -> KmlData | None:
        """The most recently committed document, if any."""
        return self._current

    @property
    def error(self) -> str | None:
        """User-facing message for the latest failed load, if any."""
        return self._error

    @property
    def latest_token(self) -> int:
        return self._latest_token

    async def load(self, kml_path: Path | str) -> KmlData | None:
        """Read and parse ``kml_path``, committing the outcome if still current.

        Returns:
            The parsed document, or ``None`` if the load failed (see
            ``error``) or was superseded by a newer ``load()`` call.
        """
        self._latest_token += 1
        token = self._latest_token
        self._error = None
        source = Path(kml_path).name

        logger.info("Loading KML file %s (request %d)", source, token)

        try:
            content = await asyncio.to_thread(
                read_kml_bytes, kml_path, max_bytes=self._config.max_file_bytes
            )
        except KmlReadError as exc:
            logger.error("Read failed for %s: %s", source, exc)
            return self._commit_error(token, READ_FAILED_MESSAGE)

        if not self._is_latest(token, source):
            return None

        try:
            data = parse_kml(content)
        except ParseError:
            return self._commit_error(token, PARSE_FAILED_MESSAGE)

        self._current = data
        return data

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _is_latest(self, token: int, source: str) -> bool:
        if token == self._latest_token:
            return True
        logger.info(
            "Discarding stale load of %s (request %d superseded by %d)",
            source,
            token,
            self._latest_token,
        )
        return False

    def _commit_error(self, token: int, message: str) -> None:
        if token != self._latest_token:
            return None
        self._current = None
        self._error = message
        return None
