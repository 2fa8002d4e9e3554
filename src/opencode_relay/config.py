"""
Runtime configuration, built once at startup and passed down explicitly.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from opencode_relay.models.endpoint import Endpoint

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4096
DEFAULT_PROVIDER = "myprovider"
DEFAULT_MODEL = "GPT-4o"

CONFIG_DIR = Path.home() / ".opencode-relay"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_SESSIONS_DIR = CONFIG_DIR / "sessions"


class Config(BaseModel):
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    sessions_dir: Path = DEFAULT_SESSIONS_DIR
    timeout: Optional[float] = None  # None waits for the server indefinitely

    @property
    def endpoint(self) -> Endpoint:
        return Endpoint(host=self.host, port=self.port)

    def with_overrides(self, **overrides: Any) -> "Config":
        """Copy with every non-None override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_validate({**self.model_dump(), **updates})


def _load_config_file(path: Path) -> dict:
    try:
        data = json.loads(path.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def load_config(path: Optional[Path] = None, **overrides: Any) -> Config:
    """Defaults, then the JSON config file, then explicit overrides."""
    raw = _load_config_file(Path(path) if path else CONFIG_FILE)
    try:
        base = Config.model_validate(raw)
    except ValidationError as e:
        logger.warning("Ignoring invalid config file %s: %s", path or CONFIG_FILE, e)
        base = Config()
    return base.with_overrides(**overrides)
