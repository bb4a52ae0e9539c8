"""Persisted list of tracked repository references."""

import json
import logging
from pathlib import Path
from urllib.parse import urlparse

from pr_view.exceptions import DuplicateRefError, RefNotFoundError, StoreError, ValidationError
from pr_view.models import RepoRef

logger = logging.getLogger(__name__)


def _looks_like_url(raw: str) -> bool:
    return "github.com/" in raw or raw.startswith(("http://", "https://"))


def normalize_ref(raw: str) -> str:
    """Turn user input (plain ref or GitHub URL) into a canonical reference.

    ``https://github.com/o/r/pull/42/files`` becomes ``o/r#42`` and
    ``github.com/o/r/tree/main`` becomes ``o/r``.
    """
    raw = raw.strip()
    if not raw:
        raise ValidationError("empty repo")

    if _looks_like_url(raw):
        # urlparse needs a scheme to find the path of "github.com/o/r"
        parsed = urlparse(raw if "://" in raw else f"https://{raw}")
        parts = parsed.path.strip("/").split("/")
        if len(parts) >= 4 and parts[2] == "pull" and parts[3].isdecimal():
            raw = f"{parts[0]}/{parts[1]}#{parts[3]}"
        elif len(parts) >= 2:
            raw = f"{parts[0]}/{parts[1]}"

    return str(RepoRef.parse(raw))


class RepoStore:
    """Reads and writes the ordered repo list as a JSON array of strings."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> list[str]:
        """Return stored refs; a missing, empty or malformed file means none."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StoreError(f"cannot read {self.path}: {e}") from e

        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring malformed repo file %s: %s", self.path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring repo file %s: expected a JSON array", self.path)
            return []
        return [r for r in data if isinstance(r, str)]

    def save(self, refs: list[str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(refs, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise StoreError(f"cannot write {self.path}: {e}") from e

    def add(self, raw: str) -> str:
        """Normalize, validate and append a reference; return what was stored."""
        ref = normalize_ref(raw)
        refs = self.load()
        if any(r.lower() == ref.lower() for r in refs):
            raise DuplicateRefError("repo already exists")
        refs.append(ref)
        self.save(refs)
        logger.debug("Added %s to %s", ref, self.path)
        return ref

    def remove(self, raw: str) -> str:
        """Remove the first matching reference; return the stored entry."""
        ref = raw.strip()
        if not ref:
            raise ValidationError("empty repo")
        refs = self.load()
        for i, r in enumerate(refs):
            if r.lower() == ref.lower() or r == ref:
                del refs[i]
                self.save(refs)
                logger.debug("Removed %s from %s", r, self.path)
                return r
        raise RefNotFoundError("repo not found")
