"""Logging setup shared by the engine, data layer, CLI and app."""

import logging

from config.settings import settings

formatter = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)

file_handler = None
if settings.LOG_FILE:
    file_handler = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
    file_handler.setFormatter(formatter)

_root = logging.getLogger("mpi")


def get_logger(name: str = "mpi") -> logging.Logger:
    """Return a logger under the shared ``mpi`` namespace."""
    if not _root.handlers:
        _root.setLevel(settings.LOG_LEVEL)
        _root.addHandler(console_handler)
        if file_handler is not None:
            _root.addHandler(file_handler)
    if name == "mpi" or name.startswith("mpi."):
        return logging.getLogger(name)
    return logging.getLogger(f"mpi.{name}")
