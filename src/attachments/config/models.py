"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, attachments.toml only contains
overrides. A fresh site needs no configuration at all: the default
``attachments`` instance is registered for posts and pages.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- attachments.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    default_category: str = "post"
    categories: list[str] = Field(default_factory=list)
    register_default_instance: bool = True
    locale_dir: str | None = None
    languages: list[str] = Field(default_factory=list)


class FieldConfig(BaseModel):
    """One entry of an instance's ``fields`` array.

    Unset keys fall back to the field factory defaults.
    """

    model_config = {"frozen": True}

    name: str | None = None
    type: str | None = None
    label: str | None = None

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class InstanceConfig(BaseModel):
    """[instances.<name>] section.

    Only keys present in the TOML override the instance registry defaults.
    """

    model_config = {"frozen": True}

    label: str | None = None
    post_type: str | list[str] | None = None
    limit: int | None = None
    note: str | None = None
    button_text: str | None = None
    fields: list[FieldConfig] | None = None

    def to_params(self) -> dict[str, Any]:
        params = self.model_dump(exclude_unset=True, exclude={"fields"})
        if self.fields is not None:
            params["fields"] = [field.to_params() for field in self.fields]
        return params


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    entry_points: bool = True
    local_dir: str = ".attachments/plugins"


class AttachmentsConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    site: SiteConfig = Field(default_factory=SiteConfig)
    field_types: dict[str, str] = Field(default_factory=dict)
    instances: dict[str, InstanceConfig] = Field(default_factory=dict)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
