from __future__ import annotations

from dataclasses import dataclass
import subprocess
from typing import Mapping, Sequence


class ProcessFailedError(RuntimeError):
    def __init__(self, cmd: Sequence[str], returncode: int, stdout: str, stderr: str) -> None:
        super().__init__(f"Process failed with code {returncode}: {' '.join(cmd)}")
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@dataclass(frozen=True)
class ProcessResult:
    stdout: str
    stderr: str
    returncode: int


def run_checked(cmd: Sequence[str]) -> ProcessResult:
    proc = subprocess.run(list(cmd), capture_output=True, text=True)
    if proc.returncode != 0:
        raise ProcessFailedError(cmd, proc.returncode, proc.stdout, proc.stderr)
    return ProcessResult(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)


def run_streaming(cmd: Sequence[str], env: Mapping[str, str] | None = None) -> int:
    """Run with inherited stdio and return the exit code."""
    proc = subprocess.run(list(cmd), env=dict(env) if env is not None else None)
    return proc.returncode
