"""Typed configuration models for Stowage runtime settings.

Substrate settings live under ``components.substrate.<name>`` and are kept as
raw mappings here; each substrate validates its own subtree with its own model
through ``resolve_component_settings``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "stowage" / "stowage.yaml"

_SUBSTRATE_KIND = "substrate"


class LoggingSettings(BaseModel):
    """Log level, output shape and the service fields seeded into every line."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True
    service: str = "stowage"
    environment: str = "dev"


class SubstrateSettingsMap(BaseModel):
    """Open mapping of substrate name to that substrate's raw settings."""

    model_config = ConfigDict(extra="allow")

    def section(self, name: str) -> Mapping[str, Any]:
        """Return the raw settings for one substrate, empty when unset."""
        value = (self.model_extra or {}).get(name, {})
        if not isinstance(value, Mapping):
            raise TypeError(
                f"components.{_SUBSTRATE_KIND}.{name} must be an object mapping"
            )
        return value


class ComponentsSettings(BaseModel):
    """The ``components`` subtree; only substrate components are configurable."""

    model_config = ConfigDict(extra="forbid")

    substrate: SubstrateSettingsMap = Field(default_factory=SubstrateSettingsMap)

    @model_validator(mode="before")
    @classmethod
    def _point_flat_keys_at_grouped_form(cls, value: object) -> object:
        """Turn ``substrate_<name>`` typos into an actionable message."""
        if isinstance(value, dict):
            for key in value:
                kind, separator, name = str(key).partition("_")
                if separator and kind == _SUBSTRATE_KIND:
                    raise ValueError(
                        f"components.{key} is invalid; "
                        f"use components.{kind}.{name} instead"
                    )
        return value


class StowageSettings(BaseSettings):
    """Root settings, merged from init kwargs, env vars and the YAML file."""

    model_config = SettingsConfigDict(
        env_prefix="STOWAGE_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    components: ComponentsSettings = Field(default_factory=ComponentsSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Earlier sources win: init, then ``STOWAGE_*`` env, then YAML."""
        del dotenv_settings, file_secret_settings
        yaml_settings = YamlConfigSettingsSource(
            settings_cls, yaml_file=cls._config_path, yaml_file_encoding="utf-8"
        )
        return init_settings, env_settings, yaml_settings


TComponentSettings = TypeVar("TComponentSettings", bound=BaseModel)


def resolve_component_settings(
    *,
    settings: StowageSettings,
    component_id: str,
    model: type[TComponentSettings],
) -> TComponentSettings:
    """Validate one substrate's subtree, e.g. ``substrate_filesystem``."""
    kind, _, name = component_id.partition("_")
    if kind != _SUBSTRATE_KIND or not name:
        raise ValueError(f"not a substrate component id: {component_id!r}")
    return model.model_validate(settings.components.substrate.section(name))
