from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgentConfig(BaseModel):
    """Agent settings supplied by the admission layer for one request."""

    model_config = ConfigDict(frozen=True)

    environment: Dict[str, str] = Field(
        default_factory=dict,
        description="Environment variables injected into every application container",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def _default_environment(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("environment")
    @classmethod
    def _check_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name in value:
            if not name.strip():
                raise ValueError("environment variable names must be non-empty")
        return value

    def sorted_environment(self) -> List[Tuple[str, str]]:
        """Configured pairs ordered by name, so patch output is reproducible."""

        return sorted(self.environment.items())

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AgentConfig":
        return cls.model_validate(dict(data or {}))


__all__ = ["AgentConfig"]
