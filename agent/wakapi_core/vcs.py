"""
Branch resolver — current git branch via `git rev-parse`.

Fail-permanent: the first time git is missing or errors out, version
control is switched off in settings and every later call returns the
fallback branch without spawning anything. The user re-enables it from
the preferences.
"""

import os
import shutil
import subprocess

from .config import log
from .constants import FALLBACK_BRANCH

GIT_BRANCH_CMD = ["git", "rev-parse", "--abbrev-ref", "HEAD"]


class BranchResolver:
    def __init__(self, settings, cwd=None):
        self._settings = settings
        self._cwd = cwd

    def current_branch(self) -> str:
        if not self._settings.enable_version_control:
            return FALLBACK_BRANCH
        return self._probe()

    def _disable(self, message, detail=""):
        log.error(
            "%s Disabling version control support. It can be re-enabled from the preferences.%s",
            message, f"\n{detail}" if detail else "",
        )
        self._settings.enable_version_control = False
        return FALLBACK_BRANCH

    def _probe(self):
        if shutil.which("git") is None:
            return self._disable("You don't have git installed.")

        try:
            proc = subprocess.run(
                GIT_BRANCH_CMD,
                cwd=self._cwd or os.getcwd(),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            return self._disable("There was an error getting your git branch.", str(e))

        error = (proc.stderr or "").strip()
        if error or proc.returncode != 0:
            return self._disable(
                "There was an error getting your git branch.",
                error or f"git exited with status {proc.returncode}",
            )

        return (proc.stdout or "").strip() or FALLBACK_BRANCH
