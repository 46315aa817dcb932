"""Example script: the defensive-script patterns wired together.

Run with ``python main.py [args...]`` or the ``safescript`` console script.
"""
from __future__ import annotations
import argparse
import sys
from typing import Sequence

from colorama import just_fix_windows_console

from safescript.core.errors import MissingDependencyError
from safescript.core.hooks import ScriptGuard
from safescript.core.logging import Logger, Severity, caller_location
from safescript.core.paths import script_dir
from safescript.core.strict import require_command, run_command
from safescript.system.settings import Settings
from safescript.ui.input import confirm, read_values

PROMPTS = ("Enter some value", "Enter other value")

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="safescript", description=__doc__.splitlines()[0])
    p.add_argument("args", nargs="*", help="positional values, logged as argv")
    p.add_argument("--no-prompt", action="store_true", help="skip the interactive prompts")
    p.add_argument("--require", default="sh", metavar="NAME",
                   help="program that must be on PATH (default: %(default)s)")
    p.add_argument("--fail", action="store_true", help="run a failing command to show the error report")
    p.add_argument("--settings", default=None, help="path to a JSON settings file")
    return p

class Script:
    def __init__(self, logger: Logger, show_location: bool = False):
        self.logger = logger
        self.show_location = show_location

    def log(self, msg: str, severity: Severity | str | None = None):
        where = caller_location() if self.show_location else None
        self.logger.log(msg, severity, where)

    def foo(self):
        self.log("foo function")

    def bar(self, *args: str):
        """Log the function's own arguments, like a shell function sees $#/$@."""
        self.log("local bar variables:")
        self.log(f"$#: {len(args)}")
        self.log(f"$@: {' '.join(args)}")
        for i, a in enumerate(args, 1):
            self.log(f"${i}: {a}")

    def main(self, ns: argparse.Namespace, script_path: str) -> int:
        self.log(f"absolute directory is: {script_dir(script_path)}")
        self.log(f"argc $#: {len(ns.args)}")
        self.log(f"argv $@: {' '.join(ns.args)}")

        if not ns.no_prompt:
            x, y = read_values(PROMPTS)
            self.log(f"x={x} y={y}")

        try:
            require_command(ns.require)
        except MissingDependencyError as e:
            self.log(str(e), Severity.ERROR)
            return 1

        self.foo()
        self.bar(*ns.args)

        if ns.fail and (ns.no_prompt or confirm("Run a failing command?", default=True)):
            # strict mode: a nonzero status aborts the whole script
            run_command([sys.executable, "-c", "import sys; sys.exit(3)"])

        self.log("thanks for learning python ... bye")
        return 0

def main(argv: Sequence[str] | None = None, script_path: str | None = None) -> int:
    just_fix_windows_console()
    ns = build_parser().parse_args(argv)
    settings = Settings.load(ns.settings)
    logger = Logger(settings.logger_config())
    guard = ScriptGuard(logger)
    script = Script(logger, show_location=settings.data.show_location)
    return guard.run(script.main, ns, script_path or sys.argv[0] or __file__)

def run():
    sys.exit(main())
