"""
Settings for the StarRocks driver using pydantic-settings.

Values are taken from the defaults below and ``SR_``-prefixed environment variables.
Keys found in a local JSON file (``sr_local_conf.json``) take precedence over both.
"""

import json
import logging
import os
from typing import Any, Dict, Literal, Optional

from pydantic import Field, field_validator
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import StarRocksDriverError
from .logging import DEFAULT_LOG_LEVEL

LOCALCONFIG = "sr_local_conf.json"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9030
DEFAULT_CATALOG = "default_catalog"
DEFAULT_TIMEZONE = "UTC"

logger = logging.getLogger(__name__.split(".")[0])


class DatabaseSettings(BaseSettings):
    """Connection details for a StarRocks frontend"""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    catalog: str = DEFAULT_CATALOG
    dbname: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    additional_options: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="SR_",
        case_sensitive=False,
        extra="ignore",
    )


class DriverSettings(BaseSettings):
    """Main driver settings"""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    loglevel: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default=DEFAULT_LOG_LEVEL,
        validation_alias=AliasChoices("loglevel", "SR_LOG_LEVEL"),
    )
    query_log_max_length: int = 300

    model_config = SettingsConfigDict(
        env_prefix="SR_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("loglevel", mode="before")
    @classmethod
    def validate_loglevel(cls, v: str) -> str:
        """Validate and set logging level"""
        v = str(v).upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"'{v}' is not a valid logging value {tuple(valid_levels)}")
        logger.setLevel(v)
        return v


def load_config(filename: Optional[str] = None) -> DriverSettings:
    """
    Create settings, updated from a JSON file when one is given or found locally.

    :param filename: path of a JSON settings file; defaults to ``sr_local_conf.json``.
    :return: a new DriverSettings instance.
    """
    if filename is None:
        if not os.path.exists(LOCALCONFIG):
            logger.debug("No config file was found.")
            return DriverSettings()
        filename = LOCALCONFIG

    try:
        with open(filename, "r") as fid:
            data: Dict[str, Any] = json.load(fid)
    except (OSError, ValueError) as e:
        raise StarRocksDriverError(f"Could not read settings file {filename}") from e
    logger.info(f"StarRocks driver is configured from {os.path.abspath(filename)}")
    return DriverSettings(**data)


config = load_config()
