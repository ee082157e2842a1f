"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPUSNAV_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Campus Navigation API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    graph_file: Path = Field(
        default=Path("data/campus_graph.json"),
        description="JSON document describing campus locations and the paths between them.",
    )
    walking_speed_m_per_min: float = Field(
        default=83.33,
        gt=0.0,
        description="Walking speed (5 km/h) used for default edge times and the time heuristic.",
    )
    alternative_similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Maximum waypoint overlap an alternative path may share with accepted paths.",
    )
    composition_similarity_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Overlap above which merged route lists treat two routes as duplicates.",
    )
    default_max_routes: int = Field(default=3, ge=1)
    max_search_iterations: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on priority-queue pops per search. None disables the bound.",
    )
    max_allocation_iterations: Optional[int] = Field(
        default=None,
        ge=1,
        description="Upper bound on Vogel allocation rounds. None disables the bound.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "graph_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
