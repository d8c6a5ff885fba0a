# logger.py
"""
Logging setup for the inference engine.

Every component logs through its own named logger (``logging.getLogger("logic")``
and so on). ``setup_logging`` gives each of them a ``<name>.log`` file and
mirrors the ``controller`` and ``main`` loggers to the console. Records carry
the simulation tick set by ``set_loop_index`` so the per-component files can
be lined up against each other.
"""

import glob
import logging
import os
from contextvars import ContextVar

_TICK = ContextVar("tick", default=-1)

LOGGER_NAMES = [
    "main",
    "controller",
    "logic",
    "rule_engine",
    "fuzzifier",
    "defuzzifier",
    "config",
    "profiler",
]
CONSOLE_LOGGERS = ("main", "controller")

LOG_FORMAT = "%(i)06d | %(levelname)s | %(name)s | %(message)s"


def set_loop_index(i: int) -> None:
    """Stamps subsequent log records with the simulation tick index."""
    _TICK.set(int(i))


class LoopIndexFilter(logging.Filter):
    """Adds the current tick index to every record as ``record.i``."""

    def filter(self, record):
        record.i = _TICK.get()
        return True


def _remove_rotated(log_dir: str) -> None:
    for path in glob.glob(os.path.join(log_dir, "*.log.*")):
        try:
            os.remove(path)
        except OSError:
            logging.getLogger("main").debug("Could not remove stale log '%s'", path)


def _stamped(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)
    handler.addFilter(LoopIndexFilter())
    return handler


def setup_logging(
    log_dir: str = "logs",
    overwrite: bool = True,
    log_level: int = logging.DEBUG,
    console_level: int = logging.INFO,
    cleanup_rotated: bool = True,
) -> None:
    """
    One log file per engine component plus console output for the entry point
    and the controller.

    Args:
        log_dir: Directory receiving ``<component>.log`` files.
        overwrite: Truncate existing log files instead of appending.
        log_level: Level of the component loggers and their files.
        console_level: Level of the console handler.
        cleanup_rotated: Remove leftover ``*.log.*`` files first.
    """
    os.makedirs(log_dir, exist_ok=True)
    if cleanup_rotated:
        _remove_rotated(log_dir)

    console = _stamped(logging.StreamHandler(), console_level)
    mode = "w" if overwrite else "a"

    for name in LOGGER_NAMES:
        log = logging.getLogger(name)
        log.setLevel(log_level)
        log.propagate = False
        for handler in list(log.handlers):
            log.removeHandler(handler)
            handler.close()

        path = os.path.join(log_dir, f"{name}.log")
        log.addHandler(_stamped(logging.FileHandler(path, mode=mode, encoding="utf-8"), log_level))
        if name in CONSOLE_LOGGERS:
            log.addHandler(console)

    logging.getLogger("main").info("Logging system initialized in '%s'.", log_dir)
