"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) ~/.config/stowage/stowage.yaml
4) Built-in model defaults

Environment variable format:
- Prefix: ``STOWAGE_``
- Nested keys: ``__`` separator
- Example: ``STOWAGE_LOGGING__LEVEL=DEBUG`` -> ``logging.level = "DEBUG"``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, StowageSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> StowageSettings:
    """Load settings by applying the standard Stowage precedence cascade.

    A missing YAML file is not an error; its layer simply contributes nothing.
    """
    resolved_path = (
        Path(config_path).expanduser() if config_path is not None else DEFAULT_CONFIG_PATH
    )

    class _BoundSettings(StowageSettings):
        _config_path: ClassVar[Path] = resolved_path

    return _BoundSettings(**dict(cli_params or {}))
