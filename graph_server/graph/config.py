"""Configuration schema models for the graph server."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .ids import is_legal_router_id
from .loader import LoadLevel

DEFAULT_RESOURCE_BASE = "file:/var/otp/graphs"
DEFAULT_CONFIG_PATH = "graphs.json"


class CorsConfig(BaseModel):
    """CORS configuration."""

    allow_origins: Optional[List[str]] = Field(None, description="Allowed origins")
    allow_methods: Optional[List[str]] = Field(None, description="Allowed methods")
    allow_headers: Optional[List[str]] = Field(None, description="Allowed headers")
    allow_credentials: Optional[bool] = Field(None, description="Allow credentials")
    allow_origin_regex: Optional[str] = Field(None, description="Allow origin regex")
    expose_headers: Optional[List[str]] = Field(None, description="Expose headers")
    max_age: Optional[int] = Field(None, description="Max age")


class GraphServiceConfig(BaseModel):
    """Graph server configuration schema."""

    resource_base: str = Field(
        DEFAULT_RESOURCE_BASE,
        description="Base location of graph files, prefixed with 'file:', 'classpath:' or 'url:'",
    )
    path: Optional[str] = Field(
        None,
        description="Filesystem base path; when set, overrides resource_base with 'file:' + path",
    )
    auto_register: List[str] = Field(
        default_factory=list,
        description="Router ids to register and load at startup",
    )
    default_router_id: str = Field(
        "", description="Router id used when a request does not name one"
    )
    attempt_register_default: bool = Field(
        True, description="Whether to load the default router's graph at startup"
    )
    load_level: LoadLevel = Field(
        LoadLevel.FULL, description="How much graph data to materialize on load"
    )
    http_timeout: float = Field(
        30.0, description="Timeout in seconds for fetching graphs over HTTP"
    )
    env: Optional[Union[str, Dict[str, Any]]] = Field(
        None, description="Environment file path or environment variables dict"
    )
    cors: Optional[CorsConfig] = Field(None, description="CORS configuration")

    @field_validator("auto_register")
    @classmethod
    def validate_auto_register(cls, v: List[str]) -> List[str]:
        """Validate router ids listed for automatic registration."""
        for router_id in v:
            if not is_legal_router_id(router_id):
                raise ValueError(
                    f"routerId '{router_id}' contains characters other than alphanumeric, underscore, and dash"
                )
        return v

    @field_validator("default_router_id")
    @classmethod
    def validate_default_router_id(cls, v: str) -> str:
        if not is_legal_router_id(v):
            raise ValueError(
                f"default routerId '{v}' contains characters other than alphanumeric, underscore, and dash"
            )
        return v

    @field_validator("env")
    @classmethod
    def validate_env(cls, v):
        """Validate environment configuration."""
        if isinstance(v, str):
            # If it's a string, it should be a path to an env file
            if not v.endswith(".env"):
                raise ValueError("Environment file must have .env extension")
        return v

    @model_validator(mode="after")
    def apply_path(self) -> GraphServiceConfig:
        """Interpret ``path`` as a filesystem base location."""
        if self.path:
            self.resource_base = f"file:{self.path}"
        return self

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> GraphServiceConfig:
        """Load configuration from a JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if not config_path.name.endswith(".json"):
            raise ValueError("Configuration file must be a JSON file")

        try:
            with open(config_path, "r") as f:
                data = json.load(f)
            return cls(**data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")
        except Exception as e:
            raise ValueError(f"Error loading configuration: {e}")

    def load_environment(self, base_path: Path) -> None:
        """Load environment variables from configuration."""
        if not self.env:
            return

        if isinstance(self.env, str):
            # Load from .env file
            env_path = base_path / self.env
            if env_path.exists():
                from dotenv import load_dotenv

                load_dotenv(env_path)
        elif isinstance(self.env, dict):
            # Set environment variables directly
            for key, value in self.env.items():
                if isinstance(value, str):
                    os.environ[key] = value
                else:
                    os.environ[key] = json.dumps(value)


def get_config_path() -> str:
    """Return the configuration file path, honouring GRAPH_SERVER_CONFIG."""
    return os.getenv("GRAPH_SERVER_CONFIG", DEFAULT_CONFIG_PATH)
