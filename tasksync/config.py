"""Configuration for tasksync.

Settings are stored in ~/.tasksync/config.json and can be overridden by
environment variables (TASKSYNC_ROOT_URL, TASKSYNC_PAGE_SIZE,
TASKSYNC_CONFIG_DIR).
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from tasksync.domain.action.models import KNOWN_ACTION_KINDS
from tasksync.domain.task.events import TASK_EVENT_KINDS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".tasksync"


class Settings(BaseModel):
    """Runtime settings for group views and the queue client."""

    root_url: str = "https://community-tc.services.mozilla.com"
    initial_page_size: int = Field(default=20, gt=0)
    page_size: int = Field(default=1000, gt=0)
    event_kinds: list[str] = Field(default_factory=lambda: list(TASK_EVENT_KINDS))
    action_kinds: list[str] = Field(default_factory=lambda: list(KNOWN_ACTION_KINDS))
    request_timeout: float = 30.0
    config_dir: Path = DEFAULT_CONFIG_DIR

    @property
    def history_file(self) -> Path:
        return self.config_dir / "history.json"


def get_config_dir() -> Path:
    """Get the tasksync config directory, honouring TASKSYNC_CONFIG_DIR."""
    env_dir = os.environ.get("TASKSYNC_CONFIG_DIR")
    return Path(env_dir).expanduser() if env_dir else DEFAULT_CONFIG_DIR


def load_settings(config_dir: Path | None = None) -> Settings:
    """Load settings from config.json, then apply environment overrides.

    An unreadable or invalid config file is ignored and defaults are used.
    """
    config_dir = config_dir or get_config_dir()
    data: dict = {}

    config_file = config_dir / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable config {config_file}: {e}")
            data = {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {config_file}: expected a JSON object")
            data = {}

    if root_url := os.environ.get("TASKSYNC_ROOT_URL"):
        data["root_url"] = root_url
    if page_size := os.environ.get("TASKSYNC_PAGE_SIZE"):
        data["page_size"] = page_size
    data["config_dir"] = config_dir

    try:
        return Settings(**data)
    except ValidationError as e:
        logger.warning(f"Invalid settings, using defaults: {e}")
        return Settings(config_dir=config_dir)


def save_settings(settings: Settings) -> None:
    """Save settings to config.json."""
    settings.config_dir.mkdir(parents=True, exist_ok=True)
    config_file = settings.config_dir / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(mode="json", exclude={"config_dir"}), indent=2),
        encoding="utf-8",
    )
