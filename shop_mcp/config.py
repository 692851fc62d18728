"""
Runtime settings read from the environment.

A .env file in the working directory is loaded first when present.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from shop_mcp.store import EmptyMatchPolicy

# Fixture directory relative to project root
DEFAULT_DATA_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "data",
)
DEFAULT_MCP_URL = "http://localhost:8080/mcp"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """Server and client configuration."""
    data_dir: str = DEFAULT_DATA_DIR
    empty_match_policy: EmptyMatchPolicy = EmptyMatchPolicy.EMPTY
    log_level: str = "INFO"
    server_url: str = DEFAULT_MCP_URL
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from SHOP_MCP_* variables and MCP_SERVER_URL.
        
        Raises:
            ValueError: If the match policy, port or log level is not valid
        """
        load_dotenv(find_dotenv(usecwd=True))
        policy = os.getenv("SHOP_MCP_EMPTY_MATCH_POLICY", EmptyMatchPolicy.EMPTY.value)
        try:
            empty_match_policy = EmptyMatchPolicy(policy.strip().lower())
        except ValueError:
            raise ValueError(
                f"SHOP_MCP_EMPTY_MATCH_POLICY must be 'empty' or 'error', got {policy!r}"
            ) from None
        port = os.getenv("SHOP_MCP_PORT", "8080")
        if not port.isdigit():
            raise ValueError(f"SHOP_MCP_PORT must be a number, got {port!r}")
        log_level = os.getenv("SHOP_MCP_LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"SHOP_MCP_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )
        return cls(
            data_dir=os.getenv("SHOP_MCP_DATA_DIR", DEFAULT_DATA_DIR),
            empty_match_policy=empty_match_policy,
            log_level=log_level,
            server_url=os.getenv("MCP_SERVER_URL", DEFAULT_MCP_URL),
            host=os.getenv("SHOP_MCP_HOST", "0.0.0.0"),
            port=int(port),
        )


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
