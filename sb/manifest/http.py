"""HTTP access to the release mirror.

Two operations are needed: fetch a directory listing as text, and stream a
release archive to disk. Both go through the HttpClient protocol so tests
can substitute MockHttpClient for the network.
"""

from __future__ import annotations

import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sb.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from collections.abc import Callable
    from http.client import HTTPResponse

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
]

type ProgressCallback = Callable[[int, int], None]

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class HttpError:
    """A failed fetch.

    Attributes:
        url: The URL that failed
        status: HTTP status code, 0 when no response was received or the
            body was unusable
        message: Human-readable reason
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Blocking mirror access; one request at a time."""

    def get_text(self, url: str) -> Result[str, HttpError]: ...

    def download(
        self,
        url: str,
        dest: Path,
        progress: ProgressCallback | None = None,
    ) -> Result[Path, HttpError]:
        """Stream url into dest, calling progress(downloaded, total) per chunk.

        ``total`` is 0 when the server sends no Content-Length.
        """
        ...


class RealHttpClient:
    """urllib client with the system trust store. Redirects are followed."""

    def __init__(self, timeout: float = 30.0, user_agent: str = "setup-blender") -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _open(self, url: str) -> HTTPResponse:
        request = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        return urllib.request.urlopen(request, timeout=self.timeout, context=self._ssl_context)

    @staticmethod
    def _failure(url: str, exc: Exception) -> HttpError:
        match exc:
            case urllib.error.HTTPError():
                return HttpError(url=url, status=exc.code, message=str(exc.reason))
            case urllib.error.URLError():
                return HttpError(url=url, status=0, message=str(exc.reason))
            case TimeoutError():
                return HttpError(url=url, status=0, message="Request timed out")
            case _:
                return HttpError(url=url, status=0, message=str(exc))

    def get_text(self, url: str) -> Result[str, HttpError]:
        """Fetch a listing, decoded with the charset the server declares (UTF-8 if none)."""
        try:
            with self._open(url) as response:
                body = response.read()
                charset = response.headers.get_content_charset() or "utf-8"
        except (urllib.error.URLError, OSError, ValueError) as e:
            return Err(self._failure(url, e))

        try:
            return Ok(body.decode(charset))
        except (UnicodeDecodeError, LookupError) as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))

    def download(
        self,
        url: str,
        dest: Path,
        progress: ProgressCallback | None = None,
    ) -> Result[Path, HttpError]:
        """Stream url into dest.

        A body shorter than the announced Content-Length is an error;
        dest then holds the partial bytes and is the caller's to remove.
        """
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            with self._open(url) as response, open(dest, "wb") as out:
                total = int(response.headers.get("Content-Length") or 0)
                received = 0
                while chunk := response.read(_CHUNK_SIZE):
                    out.write(chunk)
                    received += len(chunk)
                    if progress is not None:
                        progress(received, total)
        except (urllib.error.URLError, OSError, ValueError) as e:
            return Err(self._failure(url, e))

        if total and received < total:
            return Err(
                HttpError(url=url, status=0, message=f"Incomplete body: {received} of {total} bytes")
            )
        return Ok(dest)


class MockHttpClient:
    """Canned responses keyed by (method, url).

    Unregistered URLs answer 404. Every request is appended to ``calls``,
    which lets tests assert on what was (or was not) fetched.

    Usage:
        http = MockHttpClient()
        http.set_text("https://mirror.test/release", listing_html)
        http.set_download("https://mirror.test/release/Blender4.0/x.zip", b"PK...")
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], str | bytes | HttpError] = {}
        self.calls: list[tuple[str, str]] = []

    def set_text(self, url: str, response: str | HttpError) -> None:
        self._responses["get_text", url] = response

    def set_download(self, url: str, response: bytes | HttpError) -> None:
        self._responses["download", url] = response

    def urls(self, method: str = "get_text") -> list[str]:
        """URLs requested with method, in call order."""
        return [url for m, url in self.calls if m == method]

    def _answer(self, method: str, url: str) -> Result[str | bytes, HttpError]:
        self.calls.append((method, url))
        response = self._responses.get((method, url))
        if response is None:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_text(self, url: str) -> Result[str, HttpError]:
        answer = self._answer("get_text", url)
        if isinstance(answer, Err):
            return answer
        body = answer.value
        return Ok(body if isinstance(body, str) else body.decode("utf-8"))

    def download(
        self,
        url: str,
        dest: Path,
        progress: ProgressCallback | None = None,
    ) -> Result[Path, HttpError]:
        answer = self._answer("download", url)
        if isinstance(answer, Err):
            return answer
        body = answer.value
        data = body if isinstance(body, bytes) else body.encode("utf-8")

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
        if progress is not None:
            progress(len(data), len(data))
        return Ok(dest)
