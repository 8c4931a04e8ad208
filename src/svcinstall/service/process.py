"""Process spawning for external OS commands."""

import asyncio
import logging

from svcinstall.service.types import CommandResult

logger = logging.getLogger(__name__)

# Exit status reported when the executable itself cannot be found
COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Runs external commands and captures their output.

    Backends receive a runner instead of calling asyncio directly, so tests
    can substitute a recording fake.
    """

    async def run(self, *argv: str) -> CommandResult:
        """Run a command to completion.

        Args:
            argv: Program and arguments.

        Returns:
            CommandResult with exit status and decoded output. A missing
            executable is reported as exit status 127 rather than raised.
        """
        logger.debug("Running %s", " ".join(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            logger.debug("Command not found: %s", argv[0])
            return CommandResult(
                argv=list(argv),
                returncode=COMMAND_NOT_FOUND,
                stderr=f"{argv[0]}: command not found",
            )

        stdout, stderr = await proc.communicate()
        result = CommandResult(
            argv=list(argv),
            returncode=proc.returncode or 0,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )
        if not result.ok:
            logger.debug("%s exited with %d", argv[0], result.returncode)
        return result
