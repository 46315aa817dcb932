"""Error report and exit hook for scripts.

``ScriptGuard.run`` is the scoped form: it wraps a main function so that any
uncaught exception turns into a single ERROR line and a nonzero exit status,
and the farewell message is written exactly once however the body ends.
``ScriptGuard.install`` does the same process-wide through ``sys.excepthook``
and ``atexit`` for scripts that do not route through ``run``.
"""
from __future__ import annotations
import atexit
import sys
import traceback
from pathlib import Path
from typing import Any, Callable

from safescript.core.errors import CommandFailedError
from safescript.core.logging import Logger, Severity, SourceLocation

FAREWELL = "thanks for using this script"
INTERRUPTED_STATUS = 130

HELPERS_DIR = Path(__file__).resolve().parent

def _in_helpers(filename: str) -> bool:
    try:
        return Path(filename).resolve().is_relative_to(HELPERS_DIR)
    except (OSError, ValueError):
        return False

def failing_location(exc: BaseException) -> SourceLocation | None:
    """The script line that failed.

    That is the deepest traceback frame outside these core helpers, so a failing
    ``run_command`` is reported at the caller's line rather than at the raise
    inside the helper. Falls back to the deepest frame.
    """
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return None
    outside = [f for f in frames if not _in_helpers(f.filename)]
    last = (outside or frames)[-1]
    return SourceLocation(last.filename, last.lineno)

def exit_status(exc: BaseException) -> int:
    if isinstance(exc, CommandFailedError):
        if exc.returncode < 0:
            return 128 - exc.returncode  # killed by signal N, as the shell reports it
        return exc.returncode or 1
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED_STATUS
    return 1

class ScriptGuard:
    def __init__(self, logger: Logger, farewell: str | None = FAREWELL):
        self.logger = logger
        self.farewell_message = farewell
        self._farewell_done = False
        self._prev_excepthook = None

    def report_error(self, exc: BaseException) -> None:
        where = failing_location(exc)
        if where is None:
            self.logger.log(f"errexit: {exc}", Severity.ERROR)
            return
        self.logger.log(f"errexit on line {where.line} {where.file}: {exc}", Severity.ERROR, where)

    def farewell(self) -> None:
        if self._farewell_done or self.farewell_message is None:
            return
        self._farewell_done = True
        self.logger.log(self.farewell_message)

    def run(self, main: Callable[..., Any], *args: Any, **kwargs: Any) -> int:
        try:
            result = main(*args, **kwargs)
            return int(result or 0)
        except SystemExit as e:
            if e.code is None:
                return 0
            if isinstance(e.code, int):
                return e.code
            self.logger.log(str(e.code), Severity.ERROR)
            return 1
        except BaseException as e:
            self.report_error(e)
            return exit_status(e)
        finally:
            self.farewell()

    def _excepthook(self, exc_type, exc, tb) -> None:
        if exc is not None and exc.__traceback__ is None:
            exc = exc.with_traceback(tb)
        self.report_error(exc)
        if self._prev_excepthook is not None:
            self._prev_excepthook(exc_type, exc, tb)

    def install(self) -> "ScriptGuard":
        if self._prev_excepthook is None:
            self._prev_excepthook = sys.excepthook
            sys.excepthook = self._excepthook
            atexit.register(self.farewell)
        return self

    def uninstall(self) -> None:
        if self._prev_excepthook is not None:
            sys.excepthook = self._prev_excepthook
            self._prev_excepthook = None
            atexit.unregister(self.farewell)
