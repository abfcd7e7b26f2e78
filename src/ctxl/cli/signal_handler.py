"""Signal handling for the ctxl CLI.

SIGINT and, where the platform has it, SIGPIPE are recorded instead of
interrupting the program at an arbitrary point. Output writers poll the
recorded state and stop early, and the CLI turns it into the conventional
shell exit status (128 plus the signal number) once work has wound down.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Dict, List, Optional

# SIGPIPE only exists on Unix-like systems
_SIGPIPE = getattr(signal, "SIGPIPE", None)

SIGPIPE_EXIT_CODE = 141
SIGINT_EXIT_CODE = 130


class SignalHandler:
    """Records interrupting signals for later inspection.

    Each signal is handled once: the first delivery is recorded and the handler
    that was active before install() is put back, so a second Ctrl+C behaves as it
    would without ctxl's handler.

    Attributes:
        sigpipe_received: Set once SIGPIPE has been delivered.
        sigint_received: Set once SIGINT has been delivered.

    Example:
        >>> handler = SignalHandler()
        >>> handler.interrupted(), handler.exit_code()
        (False, None)
        >>> handler.sigint_received.set()
        >>> handler.interrupted(), handler.exit_code()
        (True, 130)
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self._previous: Dict[int, Any] = {}
        self._stdout_guard_registered = False

    @staticmethod
    def supported_signals() -> List[int]:
        if _SIGPIPE is None:
            return [signal.SIGINT]
        return [_SIGPIPE, signal.SIGINT]

    def install(self) -> None:
        """Route SIGINT and SIGPIPE to this handler and arrange for stdout to be silenced at exit."""
        for signum in self.supported_signals():
            self._previous[signum] = signal.signal(signum, self.handle)
        if not self._stdout_guard_registered:
            atexit.register(self.silence_stdout)
            self._stdout_guard_registered = True

    def handle(self, signum: int, frame: Optional[FrameType]) -> None:
        if signum == _SIGPIPE:
            self.sigpipe_received.set()
        else:
            self.sigint_received.set()
        previous = self._previous.pop(signum, None)
        # Handlers installed outside Python are reported as None
        signal.signal(signum, previous if previous is not None else signal.SIG_DFL)

    def interrupted(self) -> bool:
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Exit status for the recorded signal, or None if nothing was received.

        A broken pipe takes precedence over an interrupt.
        """
        if self.sigpipe_received.is_set():
            return SIGPIPE_EXIT_CODE
        if self.sigint_received.is_set():
            return SIGINT_EXIT_CODE
        return None

    def silence_stdout(self) -> None:
        """Point stdout at the null device after an interruption.

        Runs at interpreter exit, where flushing buffered output into a closed pipe
        would otherwise print an extra error.
        """
        if not self.interrupted():
            return
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


# Process-wide handler shared by the CLI entry point and the output writer
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the process-wide signal handler."""
    signal_handler.install()
