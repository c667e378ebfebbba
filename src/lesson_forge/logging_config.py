"""Logging setup for host applications embedding the pipeline.

The library itself only creates module loggers; it never configures handlers.
A host application (worker, web app, notebook) calls ``setup_logging`` once at
startup, typically with values from Settings:

    settings = load_settings()
    setup_logging(settings.log_file, settings.log_level)
"""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# SDK and HTTP loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "openai", "anthropic")


def setup_logging(
    log_file: str | Path | None = None,
    level: int | str = logging.INFO,
    quiet_sdks: bool = True,
) -> None:
    """Route pipeline logs to stdout and, optionally, a file.

    Args:
        log_file: Optional log file; parent directories are created.
        level: Root level, as a logging constant or a name such as "DEBUG".
        quiet_sdks: Raise provider SDK and HTTP client loggers to WARNING.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    if quiet_sdks:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
