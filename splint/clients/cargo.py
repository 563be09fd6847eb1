import logging
import os
import subprocess
from pathlib import Path
from typing import Final

from pydantic import BaseModel

logger = logging.getLogger(__name__)

CARGO_CHECK_ARGS: Final[tuple[str, ...]] = (
    "check",
    "--quiet",
    "--workspace",
    "--message-format=json",
    "--all-targets",
)


class CargoChecker(BaseModel):
    """Runs ``cargo check`` so its JSON diagnostics follow splint's own.

    Editors configured to use splint as their check command then still
    receive the compiler's messages.
    """

    cwd: Path | None = None
    cargo: str = os.getenv("CARGO", "cargo")

    def run(self) -> int:
        """Run cargo, letting its output go straight to our stdout.

        Returns:
            Cargo's exit code, or 127 when cargo is not installed.
        """
        command = [self.cargo, *CARGO_CHECK_ARGS]
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(command, cwd=self.cwd, check=False)
        except FileNotFoundError:
            logger.warning("cargo executable not found: %s", self.cargo)
            return 127
        return completed.returncode
