"""Clean reinstall of affected projects with lifecycle scripts disabled."""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from rich.console import Console

from ..errors import RemediationError
from ..utils.logging import get_logger

NEXT_STEPS = [
    "Rebuild your app(s) and redeploy.",
    "Purge CDN/service worker caches if you ship frontend bundles.",
    "Rotate CI/registry tokens and enable 2FA/U2F for publish.",
]


@dataclass(frozen=True)
class PackageManager:
    """How to wipe and reinstall a project for one package manager."""

    name: str
    lockfiles: Sequence[str]
    install_commands: Sequence[Sequence[str]]
    env: Optional[Dict[str, str]] = None


NPM = PackageManager(
    name="npm",
    lockfiles=("package-lock.json", "npm-shrinkwrap.json"),
    # `npm ci` needs the lockfile that was just removed, so `npm install` is the fallback
    install_commands=(("npm", "ci"), ("npm", "install")),
    env={"npm_config_ignore_scripts": "1"},
)
YARN = PackageManager(
    name="yarn",
    lockfiles=("yarn.lock",),
    install_commands=(("yarn", "install", "--ignore-scripts"),),
)
PNPM = PackageManager(
    name="pnpm",
    lockfiles=("pnpm-lock.yaml", "pnpm-lock.yml"),
    install_commands=(("pnpm", "install", "--ignore-scripts"),),
)

# Checked in order; the first manager with a lockfile present wins.
LOCKFILE_PRECEDENCE = (NPM, YARN, PNPM)
PATH_PRECEDENCE = (PNPM, YARN, NPM)


def detect_package_manager(directory: Path) -> PackageManager:
    """Pick the package manager for a project directory.

    Lockfiles decide first (npm, then yarn, then pnpm). Without any, the
    first of pnpm, yarn, npm found on PATH is used, defaulting to npm.

    Args:
        directory: Project directory

    Returns:
        Package manager to use
    """
    for manager in LOCKFILE_PRECEDENCE:
        if any((directory / lockfile).is_file() for lockfile in manager.lockfiles):
            return manager

    for manager in PATH_PRECEDENCE:
        if shutil.which(manager.name):
            return manager

    return NPM


class Remediator:
    """Removes installed modules and lockfiles, then reinstalls without scripts."""

    def __init__(self, console: Optional[Console] = None, runner: Optional[Callable[..., subprocess.CompletedProcess]] = None) -> None:
        """Initialize the remediator.

        Args:
            console: Rich console for progress output
            runner: Replacement for ``subprocess.run``
        """
        self.console = console or Console()
        self.runner = runner or subprocess.run
        self.logger = get_logger("Remediator")

    def fix_directory(self, directory: Path) -> PackageManager:
        """Clean and reinstall one project directory.

        Args:
            directory: Affected project directory

        Returns:
            The package manager that was used

        Raises:
            RemediationError: If every install command fails
        """
        manager = detect_package_manager(directory)
        self.console.print(f"→ Fixing: {directory}")

        self.console.print(f"   [{manager.name}] Removing node_modules & lockfiles…", markup=False)
        self._remove(directory, ["node_modules", *manager.lockfiles])

        self.console.print(f"   [{manager.name}] Reinstalling (scripts disabled)…", markup=False)
        env = dict(os.environ, **(manager.env or {}))

        last_error = "no install command run"
        for command in manager.install_commands:
            try:
                result = self.runner(list(command), cwd=directory, env=env, check=False)
            except OSError as e:
                last_error = f"{command[0]}: {e}"
                self.logger.debug(f"{' '.join(command)} could not start: {e}")
                continue
            if result.returncode == 0:
                self.console.print(f"   Done: {directory}")
                return manager
            last_error = f"'{' '.join(command)}' exited with {result.returncode}"
            self.logger.debug(last_error)

        raise RemediationError(directory, last_error)

    def fix_all(self, directories: List[Path]) -> List[Path]:
        """Remediate every affected directory, continuing past failures.

        Args:
            directories: Affected directories

        Returns:
            Directories whose reinstall failed
        """
        failed = []
        for directory in sorted(set(directories)):
            try:
                self.fix_directory(directory)
            except RemediationError as e:
                self.logger.error(str(e))
                self.console.print(f"❌ {e}")
                failed.append(directory)
        return failed

    def _remove(self, directory: Path, names: List[str]) -> None:
        for name in names:
            target = directory / name
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target, ignore_errors=True)
            elif target.exists() or target.is_symlink():
                target.unlink()
