"""
Pre/post fetch scripts from the ``[scripts]`` config section.
"""

import logging
import os
import subprocess

from huginn.errors import HookError

logger = logging.getLogger(__name__)

HOOK_TIMEOUT = 30


def run_hook(command, timeout=HOOK_TIMEOUT):
    """Run ``command`` through the shell; raise HookError if it fails."""
    command = os.path.expanduser(command.strip())
    try:
        result = subprocess.run(command, shell=True, check=False, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise HookError(f"hook {command!r} timed out after {timeout}s") from e
    except OSError as e:
        raise HookError(f"hook {command!r} could not start: {e}") from e
    if result.returncode != 0:
        raise HookError(f"hook {command!r} exited with {result.returncode}",
                        returncode=result.returncode)


def run_optional_hook(name, command):
    """Run a configured hook, if any. Failures are logged and ignored."""
    if not command or not command.strip():
        return False
    try:
        run_hook(command)
    except HookError as e:
        logger.warning("%s script failed: %s", name, e)
        return False
    return True
