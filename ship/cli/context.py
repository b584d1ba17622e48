from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ship.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    environ: dict[str, str]
    console: ConsoleProtocol


def build_context() -> CLIContext:
    return CLIContext(
        root=Path.cwd(),
        environ=dict(os.environ),
        console=RichConsole(),
    )
