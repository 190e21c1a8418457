import logging
import os

_NOISY_LIBRARIES = ("httpx", "httpcore", "anthropic", "urllib3", "hpack")


def setup_logging(level: str = None, fmt: str = None) -> None:
    """Configure the root logger once for the deck backend.

    - Level comes from the argument, then LOG_LEVEL, then INFO
    - A single StreamHandler is attached even if called repeatedly
    - Chatty HTTP client libraries are held at WARNING
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
        root.addHandler(handler)

    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a module logger after ensuring logging is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
