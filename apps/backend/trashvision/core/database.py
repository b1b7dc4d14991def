"""
MySQL connection management using aiomysql (async driver).

Architecture decision: no pool. Every query opens its own connection via
open_connection() and releases it on the way out, success or failure.
The dashboard issues one query every few seconds, so a pool would only
hold idle sockets against a managed database with a small connection cap.

Settings are validated into an immutable DatabaseConfig first. A missing
or malformed value raises MissingConfigError naming the config key
(host, port, user, password, database) before any network attempt is made.
"""

import logging
import ssl
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable

import aiomysql
import certifi

from trashvision.core.config import Settings

logger = logging.getLogger(__name__)

# Settings attribute -> connection key reported when it is missing,
# in the order they are checked.
REQUIRED_KEYS: dict[str, str] = {
    "db_host": "host",
    "db_port": "port",
    "db_user": "user",
    "db_password": "password",
    "db_name": "database",
}


class MissingConfigError(Exception):
    """A required database setting is absent, empty or unusable."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing environment variable: {key}")


@dataclass(frozen=True)
class DatabaseConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    use_ssl: bool = True
    verify_ssl: bool = True
    ca_file: str | None = None
    connect_timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseConfig":
        """
        Build a config from Settings, failing fast on the first missing key.

        A DB_PORT that is not a positive integer is reported as a missing
        "port": there is nothing usable to connect to either way.
        """
        for attr, key in REQUIRED_KEYS.items():
            if not str(getattr(settings, attr, "") or "").strip():
                raise MissingConfigError(key)

        port_raw = settings.db_port.strip()
        if not port_raw.isdigit() or int(port_raw) == 0:
            raise MissingConfigError(REQUIRED_KEYS["db_port"])

        return cls(
            host=settings.db_host.strip(),
            port=int(port_raw),
            user=settings.db_user,
            password=settings.db_password,
            database=settings.db_name.strip(),
            use_ssl=settings.db_ssl,
            verify_ssl=settings.db_ssl_verify,
            ca_file=settings.db_ssl_ca or None,
            connect_timeout=settings.db_connect_timeout,
        )


def build_ssl_context(config: DatabaseConfig) -> ssl.SSLContext | None:
    """
    Return the TLS context for a connection, or None when TLS is off.

    Uses certifi's CA bundle unless DB_SSL_CA points at a custom one.
    With verify_ssl=False the store's certificate is accepted without
    checking chain or hostname (self-signed deployments only).
    """
    if not config.use_ssl:
        return None

    ctx = ssl.create_default_context(cafile=config.ca_file or certifi.where())
    if not config.verify_ssl:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


@asynccontextmanager
async def open_connection(
    config: DatabaseConfig,
    connect: Callable[..., Any] = aiomysql.connect,
) -> AsyncIterator[Any]:
    """
    Open one connection and guarantee it is closed afterwards.

    `connect` defaults to aiomysql.connect; tests pass a fake factory.

    Usage:
        async with open_connection(config) as conn:
            async with conn.cursor(aiomysql.DictCursor) as cur:
                await cur.execute(sql)
    """
    logger.debug("Connecting to MySQL at %s:%s/%s", config.host, config.port, config.database)
    conn = await connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        db=config.database,
        ssl=build_ssl_context(config),
        connect_timeout=config.connect_timeout,
        autocommit=True,
    )
    try:
        yield conn
    finally:
        conn.close()
        logger.debug("MySQL connection closed")


def check_database_config(settings: Settings) -> str:
    """
    Report whether the database settings are complete.

    Returns "configured" or "unconfigured" for /health. Never raises.
    """
    try:
        DatabaseConfig.from_settings(settings)
    except MissingConfigError:
        return "unconfigured"
    return "configured"
