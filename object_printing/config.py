"""
Configuration settings for Object Printing.

Rendering options are loaded from environment variables (prefix
``OBJECT_PRINTING_``) and an optional ``.env`` file.
"""

import logging
import os
from typing import Optional
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)

# Environment variable prefix
ENV_PREFIX = "OBJECT_PRINTING_"

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class PrinterSettings(BaseSettings):
    """Rendering options shared by every configuration derived from one root."""

    # Layout
    indent_unit: str = Field(default="\t", description="String repeated once per nesting level")
    line_terminator: str = Field(default="\n", description="Terminator appended to every rendered line")

    # Guards for deep or self-referential graphs
    max_depth: Optional[int] = Field(default=64, ge=0, description="Deepest nesting level rendered; None disables the guard")
    depth_marker: str = Field(default="...", description="Text emitted in place of a value nested deeper than max_depth")
    cycle_marker: str = Field(default="<cycle: {type_name}>", description="Text emitted for a value already on the ancestor chain")

    # Logging Settings
    log_level: str = Field(default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT, description="Logging format string")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix=ENV_PREFIX,
        extra='ignore',
        case_sensitive=False,
        frozen=True,
    )

    def indent(self, depth: int) -> str:
        """Return the indentation for the given nesting level."""
        return self.indent_unit * depth


def load_settings(env_file: str = '.env', configure_logs: bool = False) -> PrinterSettings:
    """
    Load printer settings from a .env file and environment variables.

    Args:
        env_file: Path of the .env file to load before reading the environment
        configure_logs: Also configure console logging from the loaded log_level and log_format

    Returns:
        The loaded settings

    Raises:
        ValueError: If the environment holds values that fail validation
    """
    logger.info(f"Loading printer settings from {env_file} and environment variables (prefix: '{ENV_PREFIX}')...")

    try:
        env_loaded = load_dotenv(env_file, override=False)
        logger.debug(f"{env_file} loading result: {env_loaded}")
    except OSError as e:
        logger.warning(f"Failed to load {env_file}: {e}")

    printer_vars = [k for k in os.environ if k.upper().startswith(ENV_PREFIX)]
    logger.debug(f"Found {len(printer_vars)} {ENV_PREFIX} environment variables: {printer_vars}")

    try:
        settings = PrinterSettings(_env_file=env_file)
        logger.info("Printer settings loaded successfully.")
    except Exception as e:
        logger.exception(f"Critical error loading printer settings: {e}")
        raise ValueError(f"Failed to load configuration: {e}") from e

    if configure_logs:
        configure_logging(settings.log_level, settings.log_format)
    return settings


def configure_logging(log_level: str = "WARNING", log_format: str = DEFAULT_LOG_FORMAT) -> None:
    """
    Configure console logging with the specified level and format.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log message format string
    """
    try:
        numeric_level = getattr(logging, log_level.upper())

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(console_handler)
        root_logger.setLevel(numeric_level)

        logger.info(f"Logging configured: level={log_level.upper()}")

    except AttributeError:
        logger.error(f"Invalid log level: {log_level}. Using INFO instead.")
        logging.basicConfig(level=logging.INFO, format=log_format, force=True)
