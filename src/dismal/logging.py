"""
Custom logging configuration for Dismal.

Extends Python's standard logging with a custom DEEP_DEBUG level (5)
for very verbose debugging output, and maps the verbose flags of the
command line onto category loggers.

Log Levels
----------
- CRITICAL (50): Critical errors
- ERROR (40): Errors
- WARNING (30): Warnings
- INFO (20): Informational messages
- DEBUG (10): Debug messages
- DEEP_DEBUG (5): Very verbose debug messages

Verbose Flags
-------------
====  ================  ===============================================
Code  Flag              Effect
====  ================  ===============================================
T     TIMERS            report elapsed time, ``dismal.timing`` at INFO
A     AGENTS            per-agent table after every price update
L     LISTS             ``dismal.market.rosters`` at DEEP_DEBUG
C     CONSUME           ``dismal.market.trades`` at DEBUG
D     CONSUME_DETAILS   ``dismal.market.trades`` at DEEP_DEBUG
S     STATS             rolling statistics rows
====  ================  ===============================================

Examples
--------
>>> from dismal import logging
>>> logger = logging.getLogger("dismal.events.my_event")
>>> logger.info("Event executing")
>>> logger.deep("Very verbose output")

>>> flags = logging.parse_verbose_flags("CS")
>>> logging.apply_verbose_flags(flags)
"""

import enum
import logging
from typing import Any

(CRITICAL, ERROR, WARNING, INFO, DEBUG, NOTSET) = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
    logging.NOTSET,
)
DEEP_DEBUG = 5
logging.addLevelName(DEEP_DEBUG, "DEEP")

TRADES_LOGGER = "dismal.market.trades"
ROSTERS_LOGGER = "dismal.market.rosters"
TIMING_LOGGER = "dismal.timing"


class DismalLogger(logging.Logger):
    """
    Custom logger with DEEP_DEBUG level support.

    Extends Python's Logger to add the `deep()` method for very verbose
    debugging output (level 5).
    """

    def deep(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log message at DEEP_DEBUG level (5).

        Parameters
        ----------
        msg : str
            Message format string.
        *args : Any
            Arguments for message formatting.
        **kwargs : Any
            Additional logging kwargs.
        """
        if self.isEnabledFor(DEEP_DEBUG):
            self._log(DEEP_DEBUG, msg, args, **kwargs)


# Make the logging module hand out our subclass from now on
logging.setLoggerClass(DismalLogger)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)


def getLogger(name: str | None = None) -> DismalLogger:
    """
    Get a DismalLogger instance.

    Convenience wrapper around logging.getLogger() that returns
    a DismalLogger instance with DEEP_DEBUG support.
    """
    return logging.getLogger(name)  # type: ignore[return-value]


class VerboseFlag(enum.IntFlag):
    """Diagnostic detail levels selectable with ``-v``."""

    NONE = 0
    TIMERS = 1
    AGENTS = 2
    LISTS = 4
    CONSUME = 8
    CONSUME_DETAILS = 16
    STATS = 32


VERBOSE_CODES: dict[str, VerboseFlag] = {
    "T": VerboseFlag.TIMERS,
    "A": VerboseFlag.AGENTS,
    "L": VerboseFlag.LISTS,
    "C": VerboseFlag.CONSUME,
    "D": VerboseFlag.CONSUME_DETAILS,
    "S": VerboseFlag.STATS,
}

VERBOSE_NAMES: dict[VerboseFlag, str] = {
    VerboseFlag.TIMERS: "timers",
    VerboseFlag.AGENTS: "agents",
    VerboseFlag.LISTS: "prdr csmr lists",
    VerboseFlag.CONSUME: "consume",
    VerboseFlag.CONSUME_DETAILS: "consume details",
    VerboseFlag.STATS: "show stats every iter",
}


def parse_verbose_flags(codes: str | int | VerboseFlag | None) -> VerboseFlag:
    """
    Convert a string of flag letters (e.g. ``"ACS"``) into a VerboseFlag.

    Integers are accepted as a raw bitmask. Unknown letters raise
    ``ValueError``.
    """
    if codes is None:
        return VerboseFlag.NONE
    if isinstance(codes, int):
        return VerboseFlag(codes)
    flags = VerboseFlag.NONE
    for ch in codes:
        if ch not in VERBOSE_CODES:
            raise ValueError(
                f"Unknown verbose flag '{ch}'. "
                f"Valid flags: {''.join(VERBOSE_CODES)}"
            )
        flags |= VERBOSE_CODES[ch]
    return flags


def format_verbose_flags(flags: VerboseFlag) -> str:
    """Inverse of `parse_verbose_flags`: letters in canonical order."""
    return "".join(code for code, flag in VERBOSE_CODES.items() if flags & flag)


def apply_verbose_flags(flags: VerboseFlag) -> None:
    """
    Lower the level of the category loggers selected by *flags*.

    Loggers for categories that are not selected are left untouched so
    explicit ``logging`` configuration still applies.
    """
    if flags & VerboseFlag.CONSUME_DETAILS:
        logging.getLogger(TRADES_LOGGER).setLevel(DEEP_DEBUG)
    elif flags & VerboseFlag.CONSUME:
        logging.getLogger(TRADES_LOGGER).setLevel(DEBUG)
    if flags & VerboseFlag.LISTS:
        logging.getLogger(ROSTERS_LOGGER).setLevel(DEEP_DEBUG)
    if flags & VerboseFlag.TIMERS:
        logging.getLogger(TIMING_LOGGER).setLevel(INFO)
