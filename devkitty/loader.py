"""DKF loader — commits parsed documents to a registry.

Two load modes sit on top of the parser:

- ``parse``: destructive. The registry ends up holding exactly the new
  document's metadata and icons.
- ``parse_append``: additive. New icons are merged over the existing ones
  (new wins on a name collision); metadata is always replaced.

Documents are parsed into a scratch ``ParsedDocument`` first and only
committed once fully valid, so a failed parse leaves the registry as it was.

``load_all`` retrieves a list of sources in order and additively parses each
one. Sources are processed strictly one after another because merge order
decides which definition wins.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable, Sequence
from functools import partial
from pathlib import Path

import httpx

from devkitty.dkf.parser import parse_document
from devkitty.errors import DKFParseError, RetrievalError, UsageError
from devkitty.registry.models import ParsedDocument
from devkitty.registry.store import IconRegistry

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 10.0

Fetch = Callable[[str], str]
AsyncFetch = Callable[[str], Awaitable[str]]


# ── Retrieval ────────────────────────────────────────────────────────


def split_sources(value: str) -> list[str]:
    """Split a whitespace-separated source list, e.g. ``"core.dkf brands.dkf"``."""
    return [v for v in value.split() if v]


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_timeout(timeout: float | None) -> float:
    if timeout is not None:
        return timeout
    return float(os.environ.get("DEVKITTY_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT))


def _read_local(source: str) -> str:
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise RetrievalError(source, exc.strerror or str(exc)) from exc


def _check_response(source: str, response: httpx.Response) -> str:
    """Return the body of a 2xx response; anything else is a retrieval failure."""
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RetrievalError(
            source, f"HTTP {response.status_code}", status_code=response.status_code
        ) from exc
    return response.text


def fetch_source(
    source: str,
    timeout: float | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Retrieve DKF text from an http(s) URL or a local file path.

    Redirects are followed; a final non-2xx status is an error.

    Raises:
        RetrievalError: the source could not be read.
    """
    if not _is_url(source):
        return _read_local(source)

    try:
        if client is not None:
            response = client.get(
                source, timeout=_fetch_timeout(timeout), follow_redirects=True
            )
        else:
            response = httpx.get(
                source, timeout=_fetch_timeout(timeout), follow_redirects=True
            )
    except httpx.HTTPError as exc:
        raise RetrievalError(source, str(exc)) from exc

    return _check_response(source, response)


async def afetch_source(
    source: str,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Async counterpart of :func:`fetch_source`."""
    if not _is_url(source):
        return await asyncio.to_thread(_read_local, source)

    try:
        if client is not None:
            response = await client.get(
                source, timeout=_fetch_timeout(timeout), follow_redirects=True
            )
        else:
            async with httpx.AsyncClient(follow_redirects=True) as owned:
                response = await owned.get(source, timeout=_fetch_timeout(timeout))
    except httpx.HTTPError as exc:
        raise RetrievalError(source, str(exc)) from exc

    return _check_response(source, response)


# ── Loader ───────────────────────────────────────────────────────────


class DKFLoader:
    """Parses DKF documents into an ``IconRegistry``.

    Parameters
    ----------
    registry : IconRegistry | None
        Store to populate. A fresh one is created when *None*.
    fetch : Callable[[str], str] | None
        Retrieval function used by :meth:`load_all`. Defaults to
        :func:`fetch_source`.
    afetch : Callable[[str], Awaitable[str]] | None
        Retrieval coroutine used by :meth:`load_all_async`. Defaults to
        :func:`afetch_source`.
    timeout : float | None
        HTTP timeout in seconds for the default retrieval functions.
        Falls back to the ``DEVKITTY_FETCH_TIMEOUT`` environment variable
        when *None*.
    client : httpx.Client | None
        HTTP client for the default :func:`fetch_source`.
    """

    def __init__(
        self,
        registry: IconRegistry | None = None,
        fetch: Fetch | None = None,
        afetch: AsyncFetch | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.registry = registry if registry is not None else IconRegistry()
        self.timeout = timeout
        self.fetch: Fetch = fetch or partial(fetch_source, timeout=timeout, client=client)
        self.afetch: AsyncFetch = afetch or partial(afetch_source, timeout=timeout)

    def parse(self, text: str) -> ParsedDocument:
        """Destructive load: replace all registry state with ``text``'s."""
        document = self._parse(text)
        self.registry.replace(document)
        logger.info("DevKitty icons loaded: %s", document.names)
        return document

    def parse_append(self, text: str) -> ParsedDocument:
        """Additive load: merge ``text``'s icons over the existing ones."""
        document = self._parse(text)
        self.registry.merge(document)
        logger.info(
            "DevKitty icons loaded: %s (%d in registry)",
            document.names,
            len(self.registry),
        )
        return document

    def load_all(self, sources: Sequence[str] | str) -> list[ParsedDocument]:
        """Fetch each source in order and additively parse it.

        A retrieval or parse failure stops the batch; documents merged
        before the failing one stay in the registry.
        """
        sources = self._check_sources(sources)
        documents = []
        for source in sources:
            text = self.fetch(source)
            logger.info("Fetched DKF source %s", source)
            documents.append(self.parse_append(text))
        return documents

    async def load_all_async(self, sources: Sequence[str] | str) -> list[ParsedDocument]:
        """Like :meth:`load_all`, awaiting each retrieval in turn."""
        sources = self._check_sources(sources)
        documents = []
        for source in sources:
            text = await self.afetch(source)
            logger.info("Fetched DKF source %s", source)
            documents.append(self.parse_append(text))
        return documents

    @staticmethod
    def _check_sources(sources: Sequence[str] | str) -> list[str]:
        if isinstance(sources, str):
            sources = split_sources(sources)
        if not sources:
            raise UsageError("load_all requires at least one source")
        return list(sources)

    @staticmethod
    def _parse(text: str) -> ParsedDocument:
        try:
            return parse_document(text)
        except DKFParseError as exc:
            logger.warning("DKF parse failed: %s", exc)
            raise
