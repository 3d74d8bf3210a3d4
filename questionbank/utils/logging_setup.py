"""
Logging setup shared by the Streamlit app and the scripts.
"""

import logging


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure root logging once.

    Args:
        level: Level name ("INFO", "DEBUG", ...) or logging constant.
            Unknown names fall back to INFO.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    # Streamlit reruns the script on every event; keep the level in sync
    logging.getLogger().setLevel(level)
