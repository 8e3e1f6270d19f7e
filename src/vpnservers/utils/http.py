"""HTTP archive download and in-memory zip extraction.

Provides [fetch_and_extract_files][vpnservers.utils.http.fetch_and_extract_files],
which downloads a provider's configuration bundle with a bounded read and
returns its members as text, keyed by file name.

Note:
    This module depends only on stdlib and ``aiohttp``. It raises library
    errors (``aiohttp.ClientError``, ``TimeoutError``, ``ValueError``,
    ``zipfile.BadZipFile``); the engine wraps them into
    [ArchiveError][vpnservers.core.exceptions.ArchiveError].
"""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile

import aiohttp


logger = logging.getLogger(__name__)

DEFAULT_MAX_ARCHIVE_SIZE = 50 * 1024 * 1024


async def _read_bounded(response: aiohttp.ClientResponse, max_size: int) -> bytes:
    """Read an entire response body, failing once it exceeds ``max_size``.

    Accumulates chunks until EOF so chunked transfer-encoding, where one
    read may return fewer bytes than requested, is handled correctly.

    Raises:
        ValueError: If the response body exceeds ``max_size``.
    """
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await response.content.read(max_size + 1 - total)
        if not chunk:
            break
        total += len(chunk)
        if total > max_size:
            raise ValueError(f"Response body too large: >{max_size} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def extract_zip_files(data: bytes) -> dict[str, str]:
    """Decode every regular file of a zip archive as UTF-8 text.

    Members are keyed by their base name; directory entries are skipped.
    Undecodable bytes are replaced rather than failing the whole archive.

    Raises:
        zipfile.BadZipFile: If ``data`` is not a zip archive.
    """
    contents: dict[str, str] = {}
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            name = posixpath.basename(info.filename)
            contents[name] = archive.read(info).decode("utf-8", errors="replace")
    return contents


async def fetch_and_extract_files(
    url: str,
    *,
    max_size: int = DEFAULT_MAX_ARCHIVE_SIZE,
    timeout: float = 60.0,  # noqa: ASYNC109
    session: aiohttp.ClientSession | None = None,
) -> dict[str, str]:
    """Download the zip archive at ``url`` and return its files as text.

    Args:
        url: Archive URL.
        max_size: Maximum accepted archive size in bytes.
        timeout: Total request timeout in seconds.
        session: Optional session to reuse; a private one is created and
            closed otherwise.

    Returns:
        Mapping of member file name to decoded content.

    Raises:
        aiohttp.ClientResponseError: On a non-2xx response.
        aiohttp.ClientError: On transport failures.
        TimeoutError: If the request exceeds ``timeout``.
        ValueError: If the archive exceeds ``max_size``.
        zipfile.BadZipFile: If the body is not a zip archive.
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)
    if session is None:
        async with aiohttp.ClientSession(timeout=client_timeout) as own_session:
            data = await _download(own_session, url, max_size)
    else:
        data = await _download(session, url, max_size, client_timeout)

    contents = extract_zip_files(data)
    logger.debug("archive_extracted url=%s size=%d files=%d", url, len(data), len(contents))
    return contents


async def _download(
    session: aiohttp.ClientSession,
    url: str,
    max_size: int,
    timeout: aiohttp.ClientTimeout | None = None,  # noqa: ASYNC109
) -> bytes:
    kwargs = {"timeout": timeout} if timeout is not None else {}
    async with session.get(url, **kwargs) as response:
        response.raise_for_status()
        return await _read_bounded(response, max_size)
