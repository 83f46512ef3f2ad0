"""Host environment detection: operating system and installed toolchains."""

import logging
import platform
import shlex
import subprocess
import sys
from typing import Optional

logger = logging.getLogger(__name__)

NOT_INSTALLED = "Not Installed"

# Probed in this order; the value is the command whose stdout is reported
LANGUAGE_COMMANDS: dict[str, str] = {
    "Go": "go version",
    "Python": "python --version",
    "Python3": "python3 --version",
    "Node.js": "node -v",
    "Ruby": "ruby -v",
    "Java": "java --version",
}

_PLATFORM_TO_GOOS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
}


def detect_os() -> str:
    """Return the running operating system (linux, darwin, windows, ...)."""
    for prefix, name in _PLATFORM_TO_GOOS.items():
        if sys.platform.startswith(prefix):
            return name
    return platform.system().lower() or sys.platform


def _run_version_command(command: str, timeout: float) -> tuple[Optional[str], Optional[str]]:
    """Run a version command and capture its stdout.

    Args:
        command: Command line, e.g. 'node -v'.
        timeout: Seconds before the probe is abandoned.

    Returns:
        Tuple of (output, error). If successful, error is None.
    """
    try:
        result = subprocess.run(
            shlex.split(command),
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        if result.returncode != 0:
            return None, f"{command} exited with {result.returncode}"
        return result.stdout.strip(), None
    except FileNotFoundError:
        return None, f"{command.split()[0]} not found"
    except subprocess.TimeoutExpired:
        return None, f"{command} timed out"
    except OSError as e:
        return None, f"Error running {command}: {str(e)}"


def detect_language_versions(timeout: float = 10.0) -> dict[str, str]:
    """Check installed versions of common programming languages.

    Every language in LANGUAGE_COMMANDS gets an entry; languages whose probe
    fails are reported as "Not Installed".
    """
    versions: dict[str, str] = {}
    for language, command in LANGUAGE_COMMANDS.items():
        output, error = _run_version_command(command, timeout)
        if error:
            logger.debug(f"{language} probe failed: {error}")
            versions[language] = NOT_INSTALLED
        else:
            versions[language] = output
    return versions
