"""Configuration management for Sift."""

from pathlib import Path
from typing import Optional, List
import yaml
from pydantic import BaseModel, Field, field_validator
from loguru import logger


DEFAULT_STATE_PATH = Path.home() / ".local" / "share" / "sift"


class SearchConfig(BaseModel):
    threshold: float = 0.4
    min_match_length: int = 2
    default_limit: int = 50
    default_types: List[str] = Field(
        default_factory=lambda: ["action", "project", "waiting", "calendar"]
    )

    @field_validator('threshold')
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError("threshold must be between 0 and 1")
        return v

    @field_validator('default_types')
    @classmethod
    def validate_types(cls, v: List[str]) -> List[str]:
        allowed = {"action", "project", "waiting", "calendar", "inbox"}
        unknown = [t for t in v if t not in allowed]
        if unknown:
            raise ValueError(f"unknown entity types: {unknown}")
        return v


class HistoryConfig(BaseModel):
    max_size: int = 50


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None


class Config(BaseModel):
    """Main configuration for Sift."""

    state_path: Path = DEFAULT_STATE_PATH
    search: SearchConfig = Field(default_factory=SearchConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('state_path')
    @classmethod
    def validate_state_path(cls, v: Path) -> Path:
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load configuration from YAML file.

        Without an explicit path the default locations are tried in order;
        if none exists the built-in defaults are used.
        """
        if config_path is None:
            candidates = [
                Path("sift.yaml"),
                Path.home() / ".config" / "sift" / "config.yaml",
            ]
            for candidate in candidates:
                if candidate.exists():
                    config_path = candidate
                    break
            else:
                logger.debug("No config file found, using defaults")
                return cls()
        elif not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        logger.info(f"Loading config from: {config_path}")
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)
