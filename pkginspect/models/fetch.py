import logging
import pathlib
from dataclasses import dataclass
from os import PathLike
from typing import Callable

import httpx

__all__ = [
    "ContainerFetcher",
    "FetchError",
    "IncompleteTransfer",
    "Progress",
    "UnknownLength",
    "fetch_bytes",
]

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http://", "https://")

ProgressCallback = Callable[["Progress"], None]


class FetchError(Exception):
    pass


class UnknownLength(FetchError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Server did not declare a Content-Length for {url}")


class IncompleteTransfer(FetchError):
    def __init__(self, loaded: int, total: int):
        self.loaded = loaded
        self.total = total
        super().__init__(f"Transfer ended after {loaded} of {total} bytes")


@dataclass(frozen=True, kw_only=True)
class Progress:
    loaded: int
    total: int

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 1.0
        return self.loaded / self.total


def is_url(source) -> bool:
    return isinstance(source, str) and source.lower().startswith(URL_SCHEMES)


def declared_length(response: httpx.Response) -> int:
    value = response.headers.get("Content-Length")
    try:
        total = int(value)
    except (TypeError, ValueError):
        raise UnknownLength(str(response.url)) from None
    if total < 0:
        raise UnknownLength(str(response.url))
    return total


class ContainerFetcher:
    """Downloads whole containers over HTTP, reporting progress per chunk."""

    def __init__(self, http_client: httpx.Client = None):
        self.http_client = http_client or httpx.Client(follow_redirects=True)

    def __enter__(self):
        self.http_client.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.http_client.__exit__(exc_type, exc_val, exc_tb)

    def download(self, url: str, *, progress: ProgressCallback = None) -> bytes:
        # Content-Length only matches the body when it is not content-encoded
        headers = {"Accept-Encoding": "identity"}
        with self.http_client.stream("GET", url, headers=headers) as response:
            response.raise_for_status()
            total = declared_length(response)
            logger.info("Downloading %s (%d bytes)", url, total)

            data = bytearray()
            for chunk in response.iter_bytes():
                data.extend(chunk)
                if len(data) > total:
                    raise IncompleteTransfer(len(data), total)
                if progress is not None:
                    progress(Progress(loaded=len(data), total=total))

        if len(data) != total:
            raise IncompleteTransfer(len(data), total)
        return bytes(data)


def read_file(path: PathLike) -> bytes:
    path = pathlib.Path(path)
    logger.info("Reading %s", path)
    with path.open("rb") as f:
        return f.read()


def fetch_bytes(
    source: bytes | bytearray | memoryview | str | PathLike,
    *,
    progress: ProgressCallback = None,
    http_client: httpx.Client = None,
) -> bytes:
    """Return the complete contents of ``source``.

    ``source`` may be raw bytes, a local path, or an http(s) URL. URLs are
    streamed and must declare their length up front; ``progress`` receives a
    ``Progress`` after every chunk.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if is_url(source):
        if http_client is not None:
            # Borrowed client: the caller owns its lifetime
            return ContainerFetcher(http_client).download(source, progress=progress)
        with ContainerFetcher() as fetcher:
            return fetcher.download(source, progress=progress)
    return read_file(source)
