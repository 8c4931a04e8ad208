"""Configuration models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class DefaultsConfig(BaseModel):
    """Defaults applied to every install, generate and uninstall call.

    ``path`` and ``env`` entries are placed before the ones given on the
    command line; ``user`` and ``home`` are used only when not given.
    """

    user: str | None = None
    home: str | None = None
    path: list[str] = Field(default_factory=list)
    env: list[str] = Field(default_factory=list)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: list[str]) -> list[str]:
        for entry in v:
            if "=" not in entry:
                raise ValueError(
                    f"defaults.env entries must look like NAME=VALUE, got: {entry!r}"
                )
        return v


class SvcConfig(BaseModel):
    """Root configuration model."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    # Used for generate/uninstall when no --force is given
    init_system: str | None = None
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
