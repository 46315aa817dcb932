from __future__ import annotations
import json, os, sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping

from safescript.core.logging import LoggerConfig, Severity
from safescript.ui.colors import colors_enabled

SETTINGS_FILENAME = ".safescript.json"
ENV_PREFIX = "SAFESCRIPT_"
_TRUE = {"1", "true", "yes", "on"}

@dataclass
class SettingsData:
    severity: str = "INFO"      # default severity for untagged messages
    color: str = "auto"         # auto, always, never
    sink: str = "stdout"        # stdout, stderr
    show_location: bool = False

    def normalize(self):
        if Severity.parse(self.severity) is None:
            self.severity = "INFO"
        self.severity = self.severity.strip().upper()
        if not isinstance(self.color, str) or self.color not in {"auto", "always", "never"}:
            self.color = "auto"
        if not isinstance(self.sink, str) or self.sink not in {"stdout", "stderr"}:
            self.sink = "stdout"
        if isinstance(self.show_location, str):
            self.show_location = self.show_location.strip().lower() in _TRUE
        self.show_location = bool(self.show_location)

class Settings:
    def __init__(self, data: SettingsData, path: Path | None = None):
        self.data = data
        self.path = path

    @classmethod
    def _read_file(cls, path: Path) -> dict:
        if not path.is_file():
            return {}
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("top level must be an object")
        except (OSError, ValueError) as e:
            # no logger exists yet; report straight to stderr
            print(f"WARNING: ignoring settings file {path}: {e}", file=sys.stderr)
            return {}
        known = {f.name for f in fields(SettingsData)}
        return {k: v for k, v in raw.items() if k in known}

    @classmethod
    def load(cls, path: Path | None = None, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        path = Path(path) if path is not None else Path.cwd() / SETTINGS_FILENAME
        values = cls._read_file(path)
        for f in fields(SettingsData):
            key = ENV_PREFIX + f.name.upper()
            if key in env:
                values[f.name] = env[key]
        data = SettingsData(**values)
        data.normalize()
        return cls(data, path)

    def sink(self):
        return sys.stderr if self.data.sink == "stderr" else sys.stdout

    def logger_config(self) -> LoggerConfig:
        sink = self.sink()
        if self.data.color == "auto":
            color = colors_enabled(sink)
        else:
            color = self.data.color == "always" and colors_enabled(sink, force=True)
        return LoggerConfig(
            sink=sink,
            default_severity=Severity.parse(self.data.severity),
            color=color,
        )
