"""
Connection settings for the mainchain RPC daemon.
"""

import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import aiohttp

from ..errors import ConfigurationError, ValidationError, create_validation_error
from ..protocol.network import DEFAULT_NETWORK, Network

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def _default_network() -> Network:
    return Network.get(DEFAULT_NETWORK)


def _check_network(value: Any) -> Network:
    if isinstance(value, Network):
        return value
    if isinstance(value, str):
        try:
            return Network.get(value)
        except ValueError as e:
            raise ValidationError(
                str(e), field="network", value=value, expected=Network.names()
            ) from e
    raise create_validation_error("network", value, "Network or network name")


def _check_port(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value < 65536:
        raise create_validation_error("port", value, "integer between 1 and 65535")
    return value


def _check_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise create_validation_error(name, value, "string")
    return value


def _check_headers(value: Any) -> Mapping[str, str]:
    if not isinstance(value, Mapping) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise create_validation_error("headers", value, "mapping of str to str")
    return MappingProxyType(dict(value))


_CHECKS = {
    "network": _check_network,
    "port": _check_port,
    "host": lambda value: _check_str("host", value),
    "username": lambda value: _check_str("username", value),
    "password": lambda value: _check_str("password", value),
    "headers": _check_headers,
}


@dataclass(frozen=True)
class BridgeConfig:
    """Settings for one mainchain RPC endpoint.

    ``port`` defaults to the mainchain RPC port of ``network``.
    """

    network: Network = field(default_factory=_default_network)
    port: Optional[int] = None
    host: str = "localhost"
    username: str = "user"
    password: str = field(default="password", repr=False)
    headers: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))

    def __post_init__(self) -> None:
        for name, check in _CHECKS.items():
            value = getattr(self, name)
            if name == "port" and value is None:
                value = self.network.mainchain_port
            object.__setattr__(self, name, check(value))

    def __hash__(self) -> int:
        return hash(
            (
                self.network,
                self.port,
                self.host,
                self.username,
                self.password,
                tuple(sorted(self.headers.items())),
            )
        )

    def merge(self, options: Mapping[str, Any]) -> "BridgeConfig":
        """Return a copy with the fields present in ``options`` applied.

        Keys mapped to ``None`` count as absent. When ``network`` changes and
        no ``port`` is given, the port follows the new network.
        """
        if not isinstance(options, Mapping):
            raise create_validation_error("options", options, "mapping")

        updates: Dict[str, Any] = {}
        for name, value in options.items():
            if value is None:
                continue
            if name not in _CHECKS:
                raise ValidationError(
                    f"Unknown bridge option '{name}'", field=name, value=value
                )
            updates[name] = _CHECKS[name](value)

        if "network" in updates and "port" not in updates:
            updates["port"] = updates["network"].mainchain_port

        return replace(self, **updates)

    @classmethod
    def from_options(
        cls, options: Optional[Mapping[str, Any]] = None
    ) -> "BridgeConfig":
        """Instantiate from an options mapping."""
        config = cls()
        if options:
            config = config.merge(options)
        return config

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = "SIDEBRIDGE_",
    ) -> "BridgeConfig":
        """Instantiate from ``<prefix>RPC_HOST``, ``RPC_PORT``, ``RPC_USER``,
        ``RPC_PASSWORD`` and ``NETWORK`` environment variables."""
        env = os.environ if environ is None else environ
        options: Dict[str, Union[str, int]] = {}

        if f"{prefix}NETWORK" in env:
            options["network"] = env[f"{prefix}NETWORK"]
        if f"{prefix}RPC_HOST" in env:
            options["host"] = env[f"{prefix}RPC_HOST"]
        if f"{prefix}RPC_USER" in env:
            options["username"] = env[f"{prefix}RPC_USER"]
        if f"{prefix}RPC_PASSWORD" in env:
            options["password"] = env[f"{prefix}RPC_PASSWORD"]
        if f"{prefix}RPC_PORT" in env:
            raw = env[f"{prefix}RPC_PORT"]
            try:
                options["port"] = int(raw)
            except ValueError:
                raise ConfigurationError(
                    f"{prefix}RPC_PORT must be an integer",
                    config_key=f"{prefix}RPC_PORT",
                    config_value=raw,
                ) from None

        try:
            return cls.from_options(options)
        except ValidationError as e:
            raise ConfigurationError(
                e.message, config_key=e.field, config_value=e.value, cause=e
            ) from e

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def auth(self) -> aiohttp.BasicAuth:
        return aiohttp.BasicAuth(self.username, self.password)
