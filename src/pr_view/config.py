"""Runtime settings: where the repo list lives and which token to use."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel

REPO_FILE_NAME = "repos.json"
CONFIG_DIR_ENV = "PR_VIEW_CONFIG_DIR"
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def default_config_dir() -> Path:
    return Path.home() / ".config" / "pr-view"


class Settings(BaseModel):
    """Process-wide values, resolved once and passed down explicitly."""

    config_dir: Path
    token: Optional[str] = None

    @property
    def repo_file(self) -> Path:
        return self.config_dir / REPO_FILE_NAME


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    config_dir: Optional[Path] = None,
) -> Settings:
    """Build settings from the environment.

    An explicit ``config_dir`` wins over ``PR_VIEW_CONFIG_DIR``, which wins
    over ``~/.config/pr-view``.  The token is the first non-empty value of
    ``GITHUB_TOKEN`` / ``GH_TOKEN``.
    """
    env = os.environ if env is None else env
    if config_dir is None:
        override = env.get(CONFIG_DIR_ENV, "").strip()
        config_dir = Path(override).expanduser() if override else default_config_dir()

    token = None
    for var in TOKEN_ENV_VARS:
        value = env.get(var, "").strip()
        if value:
            token = value
            break

    return Settings(config_dir=config_dir, token=token)
