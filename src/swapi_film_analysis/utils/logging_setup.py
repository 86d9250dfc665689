import logging
import os
from pathlib import Path
from typing import Optional, Union

from swapi_film_analysis.utils import paths

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Path] = None,
    to_file: bool = False,
) -> None:
    """
    Configure the root logger for notebooks and scripts.

    Level falls back to SWAPI_LOG_LEVEL, then INFO. Output goes to stderr
    unless `log_file` is given or `to_file` is set, in which case it goes to
    `log_file` or paths.LOG_FILE. Library modules only create loggers;
    calling this is left to the entry point.
    """
    if level is None:
        level = os.getenv("SWAPI_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()

    if log_file is None and to_file:
        log_file = paths.LOG_FILE

    kwargs = {"level": level, "format": LOG_FORMAT}
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        kwargs["filename"] = str(log_file)

    logging.basicConfig(force=True, **kwargs)
