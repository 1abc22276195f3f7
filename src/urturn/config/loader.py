from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from urturn import __version__

DEFAULT_CONFIG_PATH = Path("urturn.config.yaml")
DEFAULT_HOST = "www.urturn.com"
DEFAULT_ENDPOINT_BASE = "/api/"


class ClientSettings(BaseModel):
    """Connection settings for the urturn API client."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host: str = DEFAULT_HOST
    endpoint_base: str = Field(default=DEFAULT_ENDPOINT_BASE, alias="endpointBase")
    scheme: str = "https"
    timeout_seconds: float = 20
    user_agent: str = f"urturn-client/{__version__}"
    max_workers: int = 4
    page_url: Optional[str] = None  # Sent as href on widget-tracked requests


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load client configuration from YAML file.

    Args:
        path: Optional path to config file. Defaults to urturn.config.yaml

    Returns:
        Dictionary with configuration (empty if the default file is absent)

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValueError: If the file does not contain a mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def load_settings(path: Path | None = None, **overrides: Any) -> ClientSettings:
    """
    Build ClientSettings from the config file and keyword overrides.

    Values are read from the ``client`` section when present, otherwise from
    the top level. Overrides with a value of None are ignored.
    """
    config = load_config(path)
    section = config.get("client", config)
    if not isinstance(section, dict):
        raise ValueError("Config 'client' section must be a dictionary")

    values = dict(section)
    for key, value in overrides.items():
        if value is not None:
            values[key] = value
    return ClientSettings(**values)
