"""Shared Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Engines(BaseModel):
    model_config = ConfigDict(extra="ignore")

    node: str | None = None
    npm: str | None = None

    @field_validator("node", "npm", mode="before")
    @classmethod
    def _stringify(cls, v: object) -> object:
        # `"engines": {"node": 0.10}` is a number in JSON but a range to us
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(v)
        return v


class PackageManifest(BaseModel):
    """The subset of ``package.json`` the buildpack reads."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    version: str | None = None
    engines: Engines = Field(default_factory=Engines)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    @field_validator("engines", mode="before")
    @classmethod
    def _null_engines(cls, v: object) -> object:
        return {} if v is None else v


class Resolution(BaseModel):
    requested_range: str | None = None
    effective_range: str = ""
    version: str
    advisories: list[str] = Field(default_factory=list)
