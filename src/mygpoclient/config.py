"""Configuration management with XDG paths, atomic writes, and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.mygpoclient/`` on macOS and Windows. See :func:`get_config_dir`.
* **Config file** -- one :class:`~mygpoclient.models.ClientConfig` JSON
  file, read by :func:`load_config` and written atomically by
  :func:`save_config`. The file never contains a password, only a
  credential source descriptor.
* **Precedence resolution** -- :func:`resolve_config` merges explicit
  overrides, environment variables and the config file.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, or an interactive prompt.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from mygpoclient.client import DeviceClient, UserClient
from mygpoclient.client.device import validate_device_id
from mygpoclient.exceptions import ConfigError
from mygpoclient.models import ClientConfig

_APP_NAME = "mygpoclient"
_CONFIG_FILENAME = "config.json"

ENV_USERNAME = "GPODDER_NET_USERNAME"
ENV_PASSWORD = "GPODDER_NET_PASSWORD"
ENV_DEVICE_ID = "GPODDER_NET_DEVICEID"
ENV_BASE_URL = "GPODDER_NET_BASE_URL"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/mygpoclient/`` (default ``~/.config/mygpoclient/``).
    On macOS/Windows: ``~/.mygpoclient/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file lives in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Config file ---


def load_config() -> ClientConfig:
    """Load the client configuration from the config directory.

    Returns:
        The deserialised :class:`~mygpoclient.models.ClientConfig`, or a
        default instance if no file exists.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _config_path()
    if not path.is_file():
        return ClientConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ClientConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_config(config: ClientConfig) -> None:
    """Persist *config* atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_config_path(), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(**overrides: Any) -> ClientConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. Keyword *overrides* whose value is not ``None``
        2. Environment variables (``GPODDER_NET_USERNAME``,
           ``GPODDER_NET_PASSWORD``, ``GPODDER_NET_DEVICEID``,
           ``GPODDER_NET_BASE_URL``)
        3. Config file (``~/.config/mygpoclient/config.json``)
        4. Defaults

    ``GPODDER_NET_PASSWORD`` is never copied into the config; when it is set
    the password source becomes ``env:GPODDER_NET_PASSWORD``.

    Raises:
        ConfigError: On an unknown override key or an invalid value.
    """
    merged = load_config().model_dump()

    env_values = {
        "username": os.environ.get(ENV_USERNAME),
        "device_id": os.environ.get(ENV_DEVICE_ID),
        "base_url": os.environ.get(ENV_BASE_URL),
        "password_source": f"env:{ENV_PASSWORD}" if ENV_PASSWORD in os.environ else None,
    }
    merged.update({k: v for k, v in env_values.items() if v})

    unknown = set(overrides) - set(ClientConfig.model_fields)
    if unknown:
        raise ConfigError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ClientConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("gpodder.net password: ")

    raise ConfigError(f"Unknown credential source format: {source}")


def client_from_config(
    config: Optional[ClientConfig] = None,
) -> Union[UserClient, DeviceClient]:
    """Build a client from *config* (resolved with :func:`resolve_config` if omitted).

    Returns a :class:`~mygpoclient.client.DeviceClient` when a device id is
    configured, otherwise a :class:`~mygpoclient.client.UserClient`.

    Raises:
        ConfigError: If the user name or password source is missing.
    """
    config = config or resolve_config()
    if not config.username:
        raise ConfigError(f"No username configured (set {ENV_USERNAME} or the config file)")
    if not config.password_source:
        raise ConfigError(f"No password source configured (set {ENV_PASSWORD})")

    if config.device_id:
        validate_device_id(config.device_id)

    password = resolve_credential(config.password_source)
    user_client = UserClient(config.username, password, config=config)
    if config.device_id:
        return DeviceClient(user_client, config.device_id)
    return user_client
