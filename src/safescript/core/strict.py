"""Strict-mode helpers for running external commands.

The three shell flags map onto exceptions:
  errexit  -> run_command raises CommandFailedError on a nonzero status
  pipefail -> run_pipeline raises for the first failing stage, not just the last
  nounset  -> require_env raises UnsetVariableError for a missing variable
"""
from __future__ import annotations
import os
import shlex
import shutil
import subprocess
import threading
from typing import Mapping, Sequence

from safescript.core.errors import CommandFailedError, MissingDependencyError, UnsetVariableError

def _describe(args: Sequence[str]) -> str:
    return shlex.join([str(a) for a in args])

def run_command(args: Sequence[str], *, check: bool = True, capture: bool = True,
                env: Mapping[str, str] | None = None) -> str:
    proc = subprocess.run(
        list(args),
        stdout=subprocess.PIPE if capture else None,
        stderr=subprocess.PIPE if capture else None,
        text=True,
        env=dict(env) if env is not None else None,
    )
    if check and proc.returncode != 0:
        raise CommandFailedError(_describe(args), proc.returncode, (proc.stderr or "").strip())
    return proc.stdout or ""

def _drain(stream, sink: list, index: int) -> None:
    with stream:
        sink[index] = stream.read()

def run_pipeline(stages: Sequence[Sequence[str]]) -> str:
    if not stages:
        raise ValueError("pipeline needs at least one stage")
    procs: list[subprocess.Popen] = []
    errors: list[str] = [""] * len(stages)
    readers: list[threading.Thread] = []
    prev_out = None
    try:
        for i, args in enumerate(stages):
            last = i == len(stages) - 1
            p = subprocess.Popen(list(args), stdin=prev_out, stdout=subprocess.PIPE,
                                 stderr=subprocess.PIPE, text=True)
            if prev_out is not None:
                prev_out.close()  # let the upstream stage see SIGPIPE
            procs.append(p)
            # every stderr pipe is drained as it fills; a full one would stall its stage
            t = threading.Thread(target=_drain, args=(p.stderr, errors, i), daemon=True)
            t.start()
            readers.append(t)
            prev_out = None if last else p.stdout
    except BaseException:
        if prev_out is not None:
            prev_out.close()
        for p in procs:
            p.kill()
            p.wait()
        raise
    output = procs[-1].stdout.read()
    procs[-1].stdout.close()
    for p in procs:
        p.wait()
    for t in readers:
        t.join()
    for args, p, err in zip(stages, procs, errors):
        if p.returncode != 0:
            raise CommandFailedError(_describe(args), p.returncode, (err or "").strip())
    return output

def require_env(name: str, env: Mapping[str, str] | None = None) -> str:
    source = os.environ if env is None else env
    if name not in source:
        raise UnsetVariableError(name)
    return source[name]

def require_command(name: str, path: str | None = None) -> str:
    found = shutil.which(name, path=path)
    if found is None:
        raise MissingDependencyError(name)
    return found

def inherited_path() -> str:
    return os.environ.get("PATH", os.defpath)
