"""Data models for pr-view."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from pr_view.exceptions import ValidationError

_DIGITS = re.compile(r"\d+", re.ASCII)
_NAME = re.compile(r"[A-Za-z0-9._-]+")

FORMAT_HINT = "invalid format, expected owner/repo or owner/repo#number"


# ── Repository reference ──────────────────────────────────────────────────

class RepoRef(BaseModel):
    """A tracked ``owner/name`` or ``owner/name#number`` reference."""

    owner: str
    name: str
    number: Optional[int] = None

    @classmethod
    def parse(cls, ref: str) -> "RepoRef":
        """Split and validate a canonical reference string."""
        ref = ref.strip()
        if not ref:
            raise ValidationError("empty repo")

        repo_part = ref
        number: Optional[int] = None
        if "#" in ref:
            repo_part, num_str = (p.strip() for p in ref.split("#", 1))
            if not repo_part or not num_str:
                raise ValidationError(FORMAT_HINT)
            if not _DIGITS.fullmatch(num_str):
                raise ValidationError(f"invalid pull request number: {num_str}")
            number = int(num_str)

        parts = repo_part.split("/")
        if len(parts) != 2 or not all(p.strip() for p in parts):
            raise ValidationError("repo must be in owner/repo format")
        owner, name = (p.strip() for p in parts)
        if not (_NAME.fullmatch(owner) and _NAME.fullmatch(name)):
            raise ValidationError(f"invalid characters in repo: {repo_part!r}")
        return cls(owner=owner, name=name, number=number)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        if self.number is None:
            return self.full_name
        return f"{self.full_name}#{self.number}"


# ── GitHub data ───────────────────────────────────────────────────────────

class ChangeRequest(BaseModel):
    """An open GitHub pull request."""

    number: int
    title: str
    url: str
    author: str
    created_at: datetime


class FetchOutcome(BaseModel):
    """Result of fetching one reference: PRs on success, a reason on failure."""

    ref: str
    pull_requests: list[ChangeRequest] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
