"""Configuration and settings module for Mineplack ToDo.

Provides the :class:`TodoConfig` class which centralises all configuration
for the task tracker.  Configuration is resolved in priority order:

1. **Environment variables** (highest priority) -- ``MINEPLACK_TODO_*``
2. **Config file** -- ``<data_dir>/config.json``
3. **Defaults** (lowest priority) -- sensible built-in values

Typical usage::

    config = TodoConfig.load()                        # default data dir
    config = TodoConfig.load("/path/to/data")         # explicit data dir
    config = TodoConfig(data_dir="/custom/path")      # programmatic construction

    print(config.data_dir)       # resolved absolute path, e.g. ~/mineplacktodo
    print(config.default_file)   # "tasks.nasin"  (or overridden value)
    print(config.log_level)      # "WARNING"  (or overridden value)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Application data directory name, placed under the user's home directory.
DEFAULT_DATA_DIR_NAME = "mineplacktodo"

# Logical file name used when none is selected.
DEFAULT_FILE_NAME = "tasks.nasin"

# Config file name inside the data directory.
CONFIG_FILE_NAME = "config.json"

# Environment variable prefix.  For example, ``MINEPLACK_TODO_LOG_LEVEL=DEBUG``.
ENV_PREFIX = "MINEPLACK_TODO_"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class TodoConfig(BaseModel):
    """Centralised configuration for the task tracker.

    Attributes
    ----------
    data_dir:
        Absolute path to the directory holding task files.  Defaults to
        ``~/mineplacktodo``; falls back to the current working directory when
        the home directory cannot be determined.
    default_file:
        Logical file name loaded at startup.
    log_level:
        Python logging level name.  One of ``DEBUG``, ``INFO``, ``WARNING``,
        ``ERROR``, ``CRITICAL``.
    atomic_writes:
        Write task files to a temporary file and rename it into place.  When
        *False*, the target file is overwritten directly.
    """

    data_dir: Optional[str] = Field(
        default=None,
        description="Directory holding the task files.",
    )
    default_file: str = Field(
        default=DEFAULT_FILE_NAME,
        min_length=1,
        description="Logical file name loaded at startup.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
    )
    atomic_writes: bool = Field(
        default=True,
        description="Stage writes in a temp file and rename into place.",
    )

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def resolve_data_dir(self) -> "TodoConfig":
        """Resolve ``data_dir`` to an absolute path."""
        if self.data_dir is not None:
            self.data_dir = str(Path(self.data_dir).expanduser().resolve())
        else:
            self.data_dir = str(default_data_dir())
        return self

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise and validate the log level string."""
        normalised = value.upper().strip()
        if normalised not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{value}'. "
                f"Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}."
            )
        return normalised

    # ------------------------------------------------------------------
    # Factory: load from file + environment
    # ------------------------------------------------------------------

    @classmethod
    def load(
        cls,
        data_dir: Optional[str] = None,
        config_path: Optional[str] = None,
    ) -> "TodoConfig":
        """Load configuration with full resolution: env -> file -> defaults.

        Parameters
        ----------
        data_dir:
            Explicit data directory.  When *None*, ``MINEPLACK_TODO_DATA_DIR``
            or the default location is used.
        config_path:
            Explicit path to a ``config.json`` file.  When *None*, the config
            file is looked up at ``<data_dir>/config.json``.
        """
        env_values = _load_env_overrides()

        if data_dir is not None:
            resolved_dir = str(Path(data_dir).expanduser().resolve())
        elif "data_dir" in env_values:
            resolved_dir = str(Path(env_values["data_dir"]).expanduser().resolve())
        else:
            resolved_dir = str(default_data_dir())

        file_values = _load_config_file(resolved_dir, config_path)

        merged: dict = {}
        if file_values:
            merged.update(file_values)
        if env_values:
            merged.update(env_values)
        # The directory used to find the config file is authoritative.
        merged["data_dir"] = resolved_dir

        try:
            return cls.model_validate(merged)
        except ValidationError as exc:
            # Fields validate independently; the remaining keys are valid.
            rejected = {err["loc"][0] for err in exc.errors() if err["loc"]}
            logger.warning(
                "Ignoring invalid configuration values for: %s",
                ", ".join(sorted(str(key) for key in rejected)),
            )
            for key in rejected:
                merged.pop(key, None)
            merged["data_dir"] = resolved_dir
            return cls.model_validate(merged)

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------

    def configure_logging(self) -> None:
        """Apply the configured log level to the ``mineplack_todo`` logger.

        Attaches a stderr handler the first time it is called; later calls
        only adjust the level.
        """
        pkg_logger = logging.getLogger("mineplack_todo")
        pkg_logger.setLevel(self.log_level)

        if not pkg_logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(self.log_level)
            formatter = logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            handler.setFormatter(formatter)
            pkg_logger.addHandler(handler)
        else:
            for handler in pkg_logger.handlers:
                handler.setLevel(self.log_level)

    def to_dict(self) -> dict:
        """Return all configuration values as a plain dictionary."""
        return self.model_dump()

    def __repr__(self) -> str:
        return (
            f"TodoConfig("
            f"data_dir={self.data_dir!r}, "
            f"default_file={self.default_file!r}, "
            f"log_level={self.log_level!r}, "
            f"atomic_writes={self.atomic_writes}"
            f")"
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def default_data_dir() -> Path:
    """Return ``<home>/mineplacktodo``, or the cwd if home is unknown."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        logger.warning(
            "Could not determine the home directory. Using %s.", Path.cwd()
        )
        return Path.cwd()
    return home / DEFAULT_DATA_DIR_NAME


def _load_config_file(
    data_dir: str,
    config_path: Optional[str] = None,
) -> dict:
    """Read a ``config.json`` file and return its contents as a dict.

    Returns an empty dict if the file does not exist or is malformed.
    """
    if config_path is not None:
        path = Path(config_path).resolve()
    else:
        path = Path(data_dir) / CONFIG_FILE_NAME

    if not path.is_file():
        logger.debug("No config file at %s. Using defaults.", path)
        return {}

    try:
        with open(path, "r", encoding="utf-8") as fp:
            data = json.load(fp)
        if not isinstance(data, dict):
            logger.warning(
                "Config file %s does not contain a JSON object. Ignoring.",
                path,
            )
            return {}
        logger.info("Loaded configuration from %s", path)
        return data
    except json.JSONDecodeError:
        logger.warning(
            "Config file %s contains invalid JSON. Ignoring.",
            path,
            exc_info=True,
        )
        return {}
    except OSError:
        logger.warning(
            "Could not read config file %s. Ignoring.",
            path,
            exc_info=True,
        )
        return {}


def _load_env_overrides() -> dict:
    """Read ``MINEPLACK_TODO_*`` environment variables and return overrides.

    Supported variables:

    - ``MINEPLACK_TODO_DATA_DIR`` -- override data_dir
    - ``MINEPLACK_TODO_DEFAULT_FILE`` -- override default_file
    - ``MINEPLACK_TODO_LOG_LEVEL`` -- override log_level
    - ``MINEPLACK_TODO_ATOMIC_WRITES`` -- override atomic_writes (``true``/``false``)
    """
    overrides: dict = {}

    data_dir = os.environ.get(f"{ENV_PREFIX}DATA_DIR")
    if data_dir:
        overrides["data_dir"] = data_dir

    default_file = os.environ.get(f"{ENV_PREFIX}DEFAULT_FILE")
    if default_file is not None:
        if default_file.strip():
            overrides["default_file"] = default_file.strip()
        else:
            logger.warning("Empty %sDEFAULT_FILE value. Ignoring.", ENV_PREFIX)

    log_level = os.environ.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level is not None:
        if log_level.upper().strip() in VALID_LOG_LEVELS:
            overrides["log_level"] = log_level
        else:
            logger.warning(
                "Invalid %sLOG_LEVEL value: %r. Ignoring.", ENV_PREFIX, log_level
            )

    atomic_writes = os.environ.get(f"{ENV_PREFIX}ATOMIC_WRITES")
    if atomic_writes is not None:
        overrides["atomic_writes"] = atomic_writes.lower() in ("true", "1", "yes")

    if overrides:
        logger.info(
            "Environment overrides applied: %s",
            ", ".join(overrides.keys()),
        )

    return overrides
