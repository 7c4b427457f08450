"""Subprocess-backed process runner."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from src.build.interfaces import ProcessRunner
from src.models.build import ProcessResult

logger = logging.getLogger(__name__)


class SubprocessRunner(ProcessRunner):
    """Runs processes with ``subprocess.run`` and waits for them to exit."""

    def run(
        self,
        working_dir: Path,
        binary: str,
        args: Sequence[str],
        redirect: bool = False,
    ) -> ProcessResult:
        """Run a process to completion.

        With ``redirect`` the child's output goes straight to our stdout and
        stderr and the result's ``output`` is empty; otherwise stdout and
        stderr are captured and concatenated.

        Returns:
            ProcessResult with the exit code (-1 if the binary cannot start)
        """
        cmd = [binary, *args]
        logger.debug(f"Command: {' '.join(cmd)} (cwd: {working_dir})")

        try:
            result = subprocess.run(
                cmd,
                cwd=working_dir,
                capture_output=not redirect,
                text=True,
                check=False,  # Don't raise on non-zero exit
            )
        except (FileNotFoundError, PermissionError) as e:
            logger.error(f"Could not start {binary}: {e}")
            return ProcessResult(exit_code=-1, output=str(e))

        output = "" if redirect else (result.stdout or "") + (result.stderr or "")
        if result.returncode != 0:
            logger.error(f"{binary} failed with exit code {result.returncode}")
            if not redirect:
                logger.error(f"STDERR: {result.stderr}")
        return ProcessResult(exit_code=result.returncode, output=output)
