"""Client configuration: addresses, authentication, batching and transport options."""

from __future__ import annotations

import enum
import logging
import ssl
from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_TIMEOUT = timedelta(seconds=30)
DEFAULT_CONNECT_TIMEOUT = timedelta(seconds=10)


class ConfigError(ValueError):
    """Raised when a client configuration is not usable."""


class AuthType(enum.IntEnum):
    PASSWORD = 0
    TOKEN = 1


class ContentType(str, enum.Enum):
    MSGPACK = "MSGPACK"
    JSON = "JSON"


class CompressMethod(str, enum.Enum):
    ZSTD = "ZSTD"
    GZIP = "GZIP"
    SNAPPY = "SNAPPY"
    NONE = "NONE"


@dataclass
class Address:
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class AuthConfig:
    auth_type: AuthType = AuthType.PASSWORD
    username: str = ""
    password: str = ""
    token: str = ""


@dataclass
class BatchConfig:
    batch_interval: timedelta = timedelta(0)
    batch_size: int = 0


@dataclass
class RpConfig:
    name: str = ""
    duration: str = ""
    shard_group_duration: str = ""
    index_duration: str = ""


@dataclass
class GrpcConfig:
    addresses: list[Address] = field(default_factory=list)
    auth_config: AuthConfig | None = None
    tls_config: ssl.SSLContext | None = None
    compress_method: CompressMethod = CompressMethod.NONE
    timeout: timedelta = timedelta(0)


@dataclass
class Config:
    addresses: list[Address] = field(default_factory=list)
    auth_config: AuthConfig | None = None
    batch_config: BatchConfig | None = None
    timeout: timedelta = timedelta(0)
    connect_timeout: timedelta = timedelta(0)
    max_conns_per_host: int = 0
    max_idle_conns_per_host: int = 0
    content_type: ContentType = ContentType.JSON
    compress_method: CompressMethod = CompressMethod.NONE
    tls_config: ssl.SSLContext | None = None
    custom_metrics_labels: dict[str, str] = field(default_factory=dict)
    logger: logging.Logger | None = None
    grpc_config: GrpcConfig | None = None


def _join_host_port(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def build_endpoints(addresses, tls_enabled: bool) -> list[str]:
    """Base URLs of the given addresses, using https when TLS is enabled."""
    protocol = "https://" if tls_enabled else "http://"
    return [protocol + _join_host_port(a.host, a.port) for a in addresses]


def validate_config(config: Config) -> Config:
    """Check ``config``, fill in default timeouts and logger, and return it."""
    if not config.addresses:
        raise ConfigError("must have at least one address")
    auth = config.auth_config
    if auth is not None:
        if auth.auth_type == AuthType.TOKEN and not auth.token:
            raise ConfigError("invalid auth token")
        if auth.auth_type == AuthType.PASSWORD:
            if not auth.username:
                raise ConfigError("invalid auth username")
            if not auth.password:
                raise ConfigError("invalid auth password")
    batch = config.batch_config
    if batch is not None:
        if batch.batch_interval <= timedelta(0):
            raise ConfigError("batch enabled, batch interval must be great than 0")
        if batch.batch_size <= 0:
            raise ConfigError("batch enabled, batch size must be great than 0")
    if config.timeout <= timedelta(0):
        config.timeout = DEFAULT_TIMEOUT
    if config.connect_timeout <= timedelta(0):
        config.connect_timeout = DEFAULT_CONNECT_TIMEOUT
    if config.logger is None:
        config.logger = logging.getLogger("geminiclient")
    return config