"""Process exit codes.

Every failure path of the CLI ends in one of these codes. The values are
part of the command-line contract and must stay stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad version string, missing input)
    - 2: Environment error (unsupported platform, missing 7z, bad config)
    - 3: Not found (no release matches the version/platform)
    - 4: Network error (manifest or artifact fetch failed)
    - 5: I/O error (extraction or cache write failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NOT_FOUND = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
