"""
Transport configuration models.

A server entry is a tagged union on ``type``:

    {"type": "stdio", "command": "npx", "args": ["-y", "server-everything"]}
    {"type": "sse",   "url": "http://localhost:3000/sse", "headers": {...}}
    {"type": "http",  "url": "http://localhost:3000/mcp", "timeout": 60}

Fields the models do not name are kept (``extra="allow"``) and handed
to the transport untouched.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from mcp_service.errors import ConfigurationError, InvalidUrlError, UnknownTransportError

logger = logging.getLogger(__name__)


def parse_url(value: Any) -> httpx.URL:
    """Parse an absolute URL (scheme and host required)."""
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidUrlError(value) from e

    if not url.is_absolute_url or not url.host:
        raise InvalidUrlError(value)
    return url


class StdioTransportConfig(BaseModel):
    """Launch the server as a subprocess and talk over stdin/stdout."""

    model_config = ConfigDict(extra="allow")

    type: Literal["stdio"]
    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] | None = None
    cwd: str | None = None


class SSETransportConfig(BaseModel):
    """Connect to a server-sent events endpoint."""

    model_config = ConfigDict(extra="allow")

    type: Literal["sse"]
    url: str
    headers: dict[str, str] | None = None
    timeout: float = 5
    sse_read_timeout: float = 300

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        parse_url(value)
        return value


class HTTPTransportConfig(BaseModel):
    """Connect to a streamable HTTP endpoint."""

    model_config = ConfigDict(extra="allow")

    type: Literal["http"]
    url: str
    headers: dict[str, str] | None = None
    timeout: float = 30
    sse_read_timeout: float = 300
    terminate_on_close: bool = True

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        parse_url(value)
        return value


TransportConfig = Annotated[
    Union[StdioTransportConfig, SSETransportConfig, HTTPTransportConfig],
    Field(discriminator="type"),
]

TRANSPORT_TYPES = ("stdio", "sse", "http")

_transport_adapter: TypeAdapter = TypeAdapter(TransportConfig)


class MCPConfig(BaseModel):
    """The ``mcp`` configuration slice: server name → transport config."""

    transports: dict[str, TransportConfig]


def coerce_transport_config(
    config: StdioTransportConfig | SSETransportConfig | HTTPTransportConfig | Mapping[str, Any],
) -> StdioTransportConfig | SSETransportConfig | HTTPTransportConfig:
    """
    Turn a raw mapping into a transport config model.

    Models pass through unchanged. For mappings the discriminant and the
    url are checked first so they surface as UnknownTransportError and
    InvalidUrlError rather than a generic validation error.
    """
    if isinstance(config, (StdioTransportConfig, SSETransportConfig, HTTPTransportConfig)):
        return config
    if not isinstance(config, Mapping):
        raise UnknownTransportError(getattr(config, "type", None))

    transport_type = config.get("type")
    if transport_type not in TRANSPORT_TYPES:
        raise UnknownTransportError(transport_type)
    if transport_type != "stdio" and "url" in config:
        parse_url(config["url"])
    return _transport_adapter.validate_python(dict(config))


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Read a JSON configuration file.

    Returns the top-level mapping; the ``mcp`` slice is validated later
    by whoever asks for it.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    logger.info(f"Loaded config from {path}: sections={sorted(data)}")
    return data


def validate_slice(key: str, schema: type[BaseModel], raw: Any) -> BaseModel | None:
    """Validate one config slice; a missing slice yields None."""
    if raw is None:
        return None
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid '{key}' configuration: {e}") from e
