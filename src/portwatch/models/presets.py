"""Port type preset models."""

from pydantic import ConfigDict, Field, model_validator

from portwatch.models.base import BaseSchema


class PortRange(BaseSchema):
    """Inclusive port number range."""

    min: int = Field(ge=1, le=65535)
    max: int = Field(ge=1, le=65535)

    @model_validator(mode="after")
    def check_bounds(self) -> "PortRange":
        if self.min > self.max:
            raise ValueError(f"range min {self.min} is greater than max {self.max}")
        return self

    def contains(self, port: int) -> bool:
        return self.min <= port <= self.max


class TypePreset(BaseSchema):
    """Declarative rule assigning a category to matching ports.

    Higher priority rules are checked first. A preset without ports,
    ranges or patterns matches everything.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    ports: list[int] | None = None
    port_ranges: list[PortRange] | None = Field(default=None, alias="portRanges")
    command_patterns: list[str] | None = Field(default=None, alias="commandPatterns")
    process_patterns: list[str] | None = Field(default=None, alias="processPatterns")
    priority: int = 0

    @property
    def is_fallback(self) -> bool:
        return not (
            self.ports
            or self.port_ranges
            or self.command_patterns
            or self.process_patterns
        )


class TypePresetsConfig(BaseSchema):
    """Preset file layout: ``{"types": [...]}``."""

    types: list[TypePreset] = Field(default_factory=list)
