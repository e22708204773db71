"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class ToolRemovalPreset(BaseModel):
    """A named tool-removal policy."""
    name: str
    keep_turns_with_tools: int = Field(ge=0)  # Newest tool-bearing turns kept
    truncate_percent: float = Field(ge=0, le=100)  # Share of kept turns truncated


class Config(BaseSettings):
    """Root configuration for occ.

    Sources, highest first: environment (OCC_*), values passed in (the config
    file), defaults. CLI flags are applied on top by the commands.
    """
    model_config = SettingsConfigDict(env_prefix="OCC_", extra="ignore")

    state_dir: str | None = None  # Falls back to CLAWDBOT_STATE_DIR, then ~/.clawdbot
    agent_id: str | None = None  # Falls back to CLAWDBOT_AGENT_ID, then "main"
    preset: str = "default"  # Used when --strip-tools is given without a value
    custom_presets: dict[str, ToolRemovalPreset] = Field(default_factory=dict)
    output_format: Literal["human", "json"] = "human"
    verbose: bool = False
    strict_parsing: bool = False  # Fail on the first corrupt line instead of skipping

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides the config file
        return env_settings, init_settings
