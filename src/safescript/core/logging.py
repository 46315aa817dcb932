from __future__ import annotations
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, TextIO, Union

from colorama import Fore, Style

class Severity(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    NOTICE = "NOTICE"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, value: object) -> Optional["Severity"]:
        """Return the matching Severity, or None when the value is not one."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

COLORS = {
    Severity.DEBUG: Fore.MAGENTA,
    Severity.INFO: Fore.GREEN,
    Severity.NOTICE: Fore.BLUE,
    Severity.WARNING: Fore.YELLOW,
    Severity.ERROR: Fore.RED,
    Severity.CRITICAL: Fore.CYAN,
}
UNKNOWN_COLOR = Fore.WHITE
UNKNOWN_LABEL = "UNKNOWN"
LABEL_WIDTH = max(len(s.value) for s in Severity)
TIMESTAMP_FORMAT = "%Y/%m/%d:%H:%M:%S"

SeverityLike = Union[Severity, str, None]

@dataclass(frozen=True)
class SourceLocation:
    file: Optional[str]
    line: int

    def render(self) -> str:
        return f"(line: {self.line})"

def caller_location(depth: int = 1) -> SourceLocation:
    """Location of the function that called the caller of this helper.

    ``depth=1`` gives the line that invoked the function calling
    ``caller_location``; pass ``depth=0`` for the current line.
    """
    frame = sys._getframe(depth + 1)
    return SourceLocation(frame.f_code.co_filename, frame.f_lineno)

@dataclass
class LoggerConfig:
    sink: TextIO = field(default_factory=lambda: sys.stdout)
    default_severity: Severity = Severity.INFO
    color: bool = True
    timestamp_format: str = TIMESTAMP_FORMAT
    clock: Callable[[], datetime] = datetime.now

def _one_line(msg: str) -> str:
    return msg.replace("\r", "\\r").replace("\n", "\\n")

class Logger:
    def __init__(self, config: LoggerConfig | None = None):
        self.config = config or LoggerConfig()

    def render(self, message: str, severity: SeverityLike = None,
               location: SourceLocation | None = None) -> str:
        raw = self.config.default_severity if severity is None else severity
        parsed = Severity.parse(raw)
        message = str(message)
        if parsed is None:
            label, color = UNKNOWN_LABEL, UNKNOWN_COLOR
            message = f"{raw} {message}"
        else:
            label, color = parsed.value, COLORS[parsed]
        stamp = self.config.clock().strftime(self.config.timestamp_format)
        where = f"{location.render()} " if location is not None else ""
        body = f"[{stamp}] [{label.ljust(LABEL_WIDTH)}] {where}{_one_line(message)}"
        if not self.config.color:
            return body
        return f"{color}{body}{Style.RESET_ALL}"

    def log(self, message: str, severity: SeverityLike = None,
            location: SourceLocation | None = None) -> None:
        sink = self.config.sink
        sink.write(self.render(message, severity, location) + "\n")
        sink.flush()

    def debug(self, msg: str, location: SourceLocation | None = None): self.log(msg, Severity.DEBUG, location)
    def info(self, msg: str, location: SourceLocation | None = None): self.log(msg, Severity.INFO, location)
    def notice(self, msg: str, location: SourceLocation | None = None): self.log(msg, Severity.NOTICE, location)
    def warning(self, msg: str, location: SourceLocation | None = None): self.log(msg, Severity.WARNING, location)
    def error(self, msg: str, location: SourceLocation | None = None): self.log(msg, Severity.ERROR, location)
    def critical(self, msg: str, location: SourceLocation | None = None): self.log(msg, Severity.CRITICAL, location)
