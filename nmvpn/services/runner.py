"""
Synchronous execution of external commands.
"""

import subprocess
from typing import Sequence

from nmvpn.core.exceptions import BackendError, CommandLaunchError, CommandNotFoundError
from nmvpn.core.models import CommandOutput
from nmvpn.utils.logger import get_logger

logger = get_logger(__name__)

# Shell conventions for "not found" and "cannot execute"
NOT_FOUND_STATUS = 127
CANNOT_EXECUTE_STATUS = 126


class CommandRunner:
    """Runs one external command and captures its combined output.

    Calls block until the process exits. There is no timeout and no
    retry; every call starts exactly one process.
    """

    def run(self, args: Sequence[str]) -> CommandOutput:
        """
        Run a command.

        Launch failures are folded into the returned output instead of
        being raised, so callers only ever inspect the exit status.

        Args:
            args: Program and arguments

        Returns:
            Exit status and combined stdout/stderr
        """
        args = list(args)
        logger.debug("Running: %s", " ".join(args))
        try:
            return self._execute(args)
        except BackendError as e:
            logger.warning(e.message)
            status = (
                NOT_FOUND_STATUS
                if isinstance(e, CommandNotFoundError)
                else CANNOT_EXECUTE_STATUS
            )
            return CommandOutput(args=args, returncode=status, output=f"Error: {e.message}")

    def _execute(self, args: list[str]) -> CommandOutput:
        try:
            process = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(args[0]) from e
        except OSError as e:
            raise CommandLaunchError(args[0], str(e)) from e

        if process.returncode != 0:
            logger.warning(
                "%s exited with status %d", " ".join(args), process.returncode
            )
        return CommandOutput(
            args=args,
            returncode=process.returncode,
            output=process.stdout or "",
        )
