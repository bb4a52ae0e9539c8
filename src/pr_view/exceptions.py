"""Custom exceptions for pr-view."""

from typing import Optional


class PRViewError(Exception):
    """Base exception for all pr-view errors."""


class ValidationError(PRViewError):
    """A repository reference is empty or malformed."""


class DuplicateRefError(ValidationError):
    """The reference is already tracked."""


class RefNotFoundError(ValidationError):
    """The reference is not tracked."""


class StoreError(PRViewError):
    """Reading or writing the repo list file failed."""


class GitHubAPIError(PRViewError):
    """Error talking to the GitHub API (status, transport or decoding)."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
