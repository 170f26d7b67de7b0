"""Severity routing of rendered events to output streams.

Events at or above the threshold go to stdout, events below it go to
stderr. Nothing is dropped: every emit() performs exactly one write. A
CRITICAL event ends the process with CRITICAL_EXIT_STATUS once written.
"""

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from flatlog.core.models import Severity

logger = logging.getLogger(__name__)

CRITICAL_EXIT_STATUS = 2


@dataclass
class _ProcessDefaults:
    threshold: Severity = Severity.DEBUG


_defaults = _ProcessDefaults()


def get_default_threshold() -> Severity:
    """Threshold used by the module-level logging functions (DEBUG at startup)."""
    return _defaults.threshold


def set_default_threshold(level: "str | Severity") -> Severity:
    """Change the threshold used by the module-level logging functions.

    Returns:
        The previous threshold.
    """
    previous = _defaults.threshold
    _defaults.threshold = Severity.parse(level)
    return previous


class SeverityRouter:
    """Writes rendered events to stdout or stderr based on a threshold.

    Streams default to whatever sys.stdout and sys.stderr are at write time.
    """

    def __init__(
        self,
        threshold: Severity = Severity.INFO,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.threshold = threshold
        self._stdout = stdout
        self._stderr = stderr

    def stream_for(self, level: Severity) -> TextIO:
        """Return the stream an event at ``level`` is written to."""
        if level >= self.threshold:
            return self._stdout or sys.stdout
        return self._stderr or sys.stderr

    def emit(self, level: Severity, data: bytes) -> None:
        """Write one record followed by a newline.

        A failed write (e.g. a closed pipe) is reported on the operational
        log; CRITICAL still exits afterwards.

        Raises:
            SystemExit: After writing a CRITICAL event.
        """
        stream = self.stream_for(level)
        try:
            stream.write(data.decode("utf-8") + "\n")
            stream.flush()
        except OSError:
            logger.exception("could not write %s event", level.name)
        if level >= Severity.CRITICAL:
            sys.exit(CRITICAL_EXIT_STATUS)
