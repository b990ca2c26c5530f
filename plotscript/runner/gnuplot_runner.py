"""gnuplot process runner.

Pipes a compiled script into ``gnuplot`` on stdin and waits for it to
exit.  The script ends with ``quit``, so gnuplot terminates on its own
once the last command is read.

gnuplot reports syntax and data errors on stderr and exits non-zero for
fatal ones.  The runner does not parse or repair the script: a non-zero
exit raises :class:`GNUPlotExecutionError` carrying stderr, and stderr
output on a clean exit is logged as a warning.  There are no retries.

All timeouts come from ``PlotConfig.runner`` when built through
:meth:`GNUPlotRunner.from_config`.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plotscript.configs.loader import RunnerConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GNUPlotError(Exception):
    """Base exception for all gnuplot runner errors."""

    pass


class GNUPlotNotFound(GNUPlotError):
    """The gnuplot executable could not be started."""

    pass


class GNUPlotTimeout(GNUPlotError):
    """gnuplot did not exit within the configured timeout."""

    pass


class GNUPlotExecutionError(GNUPlotError):
    """gnuplot exited with a non-zero status.

    Attributes
    ----------
    returncode : int
        Process exit status.
    stderr : str
        Error stream text, as reported by gnuplot.
    """

    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no error output"
        super().__init__(f"gnuplot exited with status {returncode}: {detail}")


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RunResult:
    """Outcome of one gnuplot invocation."""

    returncode: int
    stdout: str
    stderr: str


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


class GNUPlotRunner:
    """Run compiled scripts through the gnuplot executable.

    Parameters
    ----------
    executable : str
        Program name or path.
    timeout_s : float
        Maximum wall time per script, in seconds.
    """

    def __init__(self, executable: str = "gnuplot", timeout_s: float = 30.0) -> None:
        if not executable:
            raise ValueError("gnuplot executable must not be empty")
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got {timeout_s}")
        self.executable = executable
        self.timeout_s = timeout_s

    @classmethod
    def from_config(cls, cfg: RunnerConfig) -> GNUPlotRunner:
        return cls(executable=cfg.executable, timeout_s=cfg.timeout_s)

    def is_available(self) -> bool:
        """Return ``True`` if the executable resolves on ``PATH``."""
        return shutil.which(self.executable) is not None

    def run(self, script: str) -> RunResult:
        """Feed *script* to gnuplot and wait for it to finish.

        Parameters
        ----------
        script : str
            Complete compiled script.

        Returns
        -------
        RunResult
            Exit status and captured output.

        Raises
        ------
        GNUPlotNotFound
            If the executable cannot be started.
        GNUPlotTimeout
            If gnuplot runs longer than ``timeout_s``.
        GNUPlotExecutionError
            If gnuplot exits with a non-zero status.
        """
        logger.info(
            "Running %s (%d script lines)", self.executable, script.count("\n"),
        )
        try:
            proc = subprocess.run(
                [self.executable],
                input=script,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
                check=False,
            )
        except FileNotFoundError as exc:
            raise GNUPlotNotFound(
                f"gnuplot executable not found: {self.executable}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise GNUPlotTimeout(
                f"gnuplot did not finish within {self.timeout_s:.1f} s"
            ) from exc

        result = RunResult(proc.returncode, proc.stdout or "", proc.stderr or "")
        if result.returncode != 0:
            raise GNUPlotExecutionError(result.returncode, result.stderr)
        if result.stderr.strip():
            logger.warning("gnuplot reported: %s", result.stderr.strip())
        return result
