from __future__ import annotations

class SafeScriptError(Exception):
    """Base for internal errors."""

class CommandFailedError(SafeScriptError):
    def __init__(self, command: str, returncode: int, detail: str = ""):
        msg = f"Command '{command}' exited with status {returncode}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.command = command
        self.returncode = returncode
        self.detail = detail

class UnsetVariableError(SafeScriptError):
    def __init__(self, name: str):
        super().__init__(f"{name}: unbound variable")
        self.name = name

class MissingDependencyError(SafeScriptError):
    def __init__(self, name: str):
        super().__init__(f"Require {name} to be there.")
        self.name = name
