"""Configuration classes for grabbit.

This module defines:
- ServerConfig: connection settings of the source (server) repository
- PathConfiguration: one content subtree to transfer
- GrabbitConfiguration: a complete client configuration file
"""

from __future__ import annotations

import json
import logging
import secrets
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from grabbit.core.types import ConfigurationError

logger = logging.getLogger(__name__)

# Delimiters used when path configuration lists are flattened into job parameters
EXCLUDE_PATHS_DELIMITER = "*"
WORKFLOW_CONFIGS_DELIMITER = "|"

DEFAULT_BATCH_SIZE = 100
DEFAULT_SCHEME = "http"
DEFAULT_CLIENT_USERNAME = "admin"


@dataclass(frozen=True)
class ServerConfig:
    """Connection settings of the source repository.

    Attributes:
        scheme: URL scheme ("http" or "https").
        host: Server host name.
        port: Server port, kept as a string as it is passed through verbatim.
    """

    scheme: str
    host: str
    port: str


def _unique(items: Iterable[str]) -> tuple[str, ...]:
    # Unordered collections are sorted so the joined parameter is stable
    if isinstance(items, (set, frozenset)):
        return tuple(sorted(items))
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class PathConfiguration:
    """One content subtree to transfer.

    Attributes:
        path: Root path of the subtree.
        exclude_paths: Paths below the root that are not transferred.
        workflow_config_ids: Workflows to trigger once the transfer is done.
        delete_before_write: Clear the target subtree before writing.
        path_delta_content: Only transfer content changed since the last
            successful run for this path.
        batch_size: Number of nodes written per commit.
    """

    path: str
    exclude_paths: tuple[str, ...] = field(default_factory=tuple)
    workflow_config_ids: tuple[str, ...] = field(default_factory=tuple)
    delete_before_write: bool = False
    path_delta_content: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        """Validate and normalize collection fields."""
        if not self.path:
            raise ConfigurationError("Path configuration requires a non-empty path")
        if self.batch_size <= 0:
            raise ConfigurationError(
                f"Batch size for {self.path} must be positive, got {self.batch_size}"
            )

        exclude_paths = _unique(self.exclude_paths)
        for exclude_path in exclude_paths:
            if EXCLUDE_PATHS_DELIMITER in exclude_path:
                raise ConfigurationError(
                    f"Exclude path {exclude_path!r} contains reserved character "
                    f"{EXCLUDE_PATHS_DELIMITER!r}"
                )

        workflow_config_ids = tuple(self.workflow_config_ids)
        for workflow_id in workflow_config_ids:
            if WORKFLOW_CONFIGS_DELIMITER in workflow_id:
                raise ConfigurationError(
                    f"Workflow config id {workflow_id!r} contains reserved character "
                    f"{WORKFLOW_CONFIGS_DELIMITER!r}"
                )

        object.__setattr__(self, "exclude_paths", exclude_paths)
        object.__setattr__(self, "workflow_config_ids", workflow_config_ids)


# === File schemas ===


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class PathConfigurationModel(_CamelModel):
    """One entry of "pathConfigurations" in a configuration file."""

    path: str = Field(min_length=1)
    exclude_paths: list[str] = Field(default_factory=list)
    workflow_config_ids: list[str] = Field(default_factory=list)
    delete_before_write: bool = False
    path_delta_content: bool | None = None
    batch_size: int | None = Field(default=None, gt=0)


class GrabbitConfigurationModel(_CamelModel):
    """Client configuration file document."""

    server_username: str
    server_password: str
    server_scheme: str = DEFAULT_SCHEME
    server_host: str
    server_port: str | int
    client_username: str = DEFAULT_CLIENT_USERNAME
    delta_content: bool = False
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, gt=0)
    path_configurations: list[PathConfigurationModel] = Field(min_length=1)


def _resolve_exclude_path(root: str, exclude_path: str) -> str:
    """Resolve an exclude path relative to its configuration root."""
    if exclude_path.startswith("/"):
        return exclude_path
    return f"{root.rstrip('/')}/{exclude_path}"


@dataclass(frozen=True)
class GrabbitConfiguration:
    """A complete client configuration.

    Attributes:
        server: Source repository connection settings.
        server_username: User to authenticate against the server.
        server_password: Password for server_username.
        client_username: Client user the transfer jobs run as.
        path_configurations: Subtrees to transfer, in order.
        transaction_id: Groups every job started from this configuration.
    """

    server: ServerConfig
    server_username: str
    server_password: str
    client_username: str
    path_configurations: tuple[PathConfiguration, ...]
    transaction_id: int = field(default_factory=lambda: secrets.randbits(63))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GrabbitConfiguration:
        """Create from a parsed configuration document.

        Paths without their own pathDeltaContent or batchSize inherit the
        document level deltaContent and batchSize.

        Raises:
            ConfigurationError: If the document is invalid.
        """
        try:
            model = GrabbitConfigurationModel.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        path_configurations = []
        for entry in model.path_configurations:
            delta = model.delta_content if entry.path_delta_content is None else entry.path_delta_content
            path_configurations.append(
                PathConfiguration(
                    path=entry.path,
                    exclude_paths=tuple(
                        _resolve_exclude_path(entry.path, p) for p in entry.exclude_paths
                    ),
                    workflow_config_ids=tuple(entry.workflow_config_ids),
                    delete_before_write=entry.delete_before_write,
                    path_delta_content=delta,
                    batch_size=entry.batch_size or model.batch_size,
                )
            )

        logger.debug("Loaded %d path configurations", len(path_configurations))
        return cls(
            server=ServerConfig(
                scheme=model.server_scheme,
                host=model.server_host,
                port=str(model.server_port),
            ),
            server_username=model.server_username,
            server_password=model.server_password,
            client_username=model.client_username,
            path_configurations=tuple(path_configurations),
        )

    @classmethod
    def from_file(cls, path: Path) -> GrabbitConfiguration:
        """Load a JSON configuration file.

        Raises:
            ConfigurationError: If the file cannot be parsed or is invalid.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration {path} must be a JSON object")
        return cls.from_dict(data)
