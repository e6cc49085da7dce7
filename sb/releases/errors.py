from __future__ import annotations

from dataclasses import dataclass

from sb.manifest.http import HttpError


@dataclass(frozen=True, slots=True)
class BadVersionString:
    specifier: str

    def __str__(self) -> str:
        return f"Bad version string: {self.specifier}"


@dataclass(frozen=True, slots=True)
class ReleaseNotFound:
    version: str
    os: str
    arch: str

    def __str__(self) -> str:
        return f"Unable to find release for {self.version}-{self.os}-{self.arch}"


@dataclass(frozen=True, slots=True)
class FetchFailed:
    """A mirror listing could not be retrieved."""

    error: HttpError

    def __str__(self) -> str:
        return str(self.error)


ResolveError = BadVersionString | ReleaseNotFound | FetchFailed
