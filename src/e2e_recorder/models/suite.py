"""Suite definition models.

A suite definition is static configuration: the report title, the
icon set, and the ordered list of scenario names the report is
rendered against. Loaded from YAML files under suites/.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class IconSet(BaseModel):
    """Icons used in the report title and status column."""

    model_config = {"extra": "forbid"}

    title: str = "\U0001f4ca"
    passed: str = "✅"
    failed: str = "❌"
    skipped: str = "⏭️"


class SuiteDefinition(BaseModel):
    """An ordered collection of scenarios sharing one report."""

    model_config = {"extra": "forbid"}

    name: str = Field(pattern=r"^[a-z0-9][a-z0-9_-]*$")
    title: str
    description: str = ""
    log_tag: str = "e2e"
    icons: IconSet = Field(default_factory=IconSet)
    scenarios: list[str] = Field(default_factory=list)

    @field_validator("scenarios")
    @classmethod
    def _unique_names(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        for name in value:
            if not name.strip():
                raise ValueError("scenario names must not be blank")
            if name in seen:
                raise ValueError(f"duplicate scenario name: {name!r}")
            seen.add(name)
        return value

    @property
    def report_title(self) -> str:
        return f"{self.icons.title} {self.title.upper()} TEST REPORT"
