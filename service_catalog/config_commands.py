"""Configuration commands for the service catalog CLI."""

from urllib.parse import urlparse

import structlog
from cyclopts import App

from service_catalog.config import get_config, resolve_base_url

logger = structlog.get_logger()

config_app = App(name="config", help="Manage configuration")

KNOWN_KEYS = {
    "api.url": "Backend base URL",
    "api.dev": "Use the development backend (true/false)",
    "api.dev_url": "Development backend base URL",
}
URL_KEYS = {"api.url", "api.dev_url"}


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Set a configuration setting.

    Args:
        key: Configuration key (api.url, api.dev, api.dev_url)
        value: Configuration value
        global_: If True, set in global config. If False, set in local config.
    """
    if key in URL_KEYS:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"{key} must be an absolute http(s) URL, got {value!r}")
    if key not in KNOWN_KEYS:
        logger.warning("Setting unknown config key", key=key, known_keys=sorted(KNOWN_KEYS))

    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {value} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Unset a configuration setting.

    Args:
        key: Configuration key
        global_: If True, unset from global config. If False, unset from local config.
    """
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Get the value of a configuration setting."""
    value = get_config(use_global=global_).get(key)
    if value is None:
        print(f"{key} is not set")
    else:
        print(f"{key} = {value}")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List all configuration settings, with the known keys that are unset."""
    settings = get_config(use_global=global_).list()

    if not settings:
        print(f"No {_scope(global_)} configuration settings")
    else:
        for key, value in settings.items():
            print(f"{key} = {value}")

    missing = [key for key in KNOWN_KEYS if key not in settings]
    if missing:
        print("\nUnset:")
        for key in missing:
            print(f"  {key}  {KNOWN_KEYS[key]}")


@config_app.command(name="api-url")
def api_url() -> None:
    """Show the backend URL the client will talk to."""
    print(resolve_base_url(get_config()))
