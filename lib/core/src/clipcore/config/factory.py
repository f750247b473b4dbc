# region Docstring
"""
clipcore.config.factory
Shared settings base class and the cached settings loader.
Overview:
- Every clipkeeper settings class derives from FactoryBaseSettings, so one .env file
    and one pair of YAML files configure the history store, the transforms, the
    transcriber and the CLI together.
Contents:
- Classes:
    - FactoryBaseSettings:
        Adds config.yaml and config.<APP_ENV>.yaml (both in APP_ROOT) to the sources
        pydantic-settings reads. Lookup order, first hit wins:
            environment variable, .env, config.<APP_ENV>.yaml, config.yaml,
            constructor keyword, field default.
- Functions:
    - yaml_config_files() -> list[Path]
    - get_settings(settings_cls) -> settings_cls instance, cached per class.
Design notes:
- Unknown keys are ignored, so a single YAML file may carry every section.
- Fields are declared with their environment variable as alias and populate_by_name
    is on, so both CLIPKEEPER_MAX_ENTRIES and max_entries are accepted.
- Anything that changes the environment after the first lookup (tests, mostly) must
    call get_settings.cache_clear().
"""
# endregion
# region Imports
from functools import lru_cache
from pathlib import Path
from typing import Type, TypeVar

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .base import APP_ENV, APP_ROOT

# endregion
# region FactoryBaseSettings Class
SettingsT = TypeVar("SettingsT", bound=BaseSettings)


def yaml_config_files() -> list[Path]:
    """YAML files read by every settings class; later files override earlier ones."""
    return [APP_ROOT / "config.yaml", APP_ROOT / f"config.{APP_ENV}.yaml"]


class FactoryBaseSettings(BaseSettings):
    """Base for clipkeeper settings: env vars, .env and YAML, in that order."""

    model_config = SettingsConfigDict(
        env_file=APP_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_config_files())
        # constructor keywords rank last so deployments can always override them
        return env_settings, dotenv_settings, yaml_settings, init_settings


# endregion
# region get_settings Factory Function
@lru_cache
def get_settings(settings_cls: Type[SettingsT]) -> SettingsT:
    """Instantiate settings_cls once and hand out the same instance afterwards."""
    return settings_cls()


# endregion
__all__ = ["FactoryBaseSettings", "get_settings", "yaml_config_files"]
