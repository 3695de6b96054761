"""Publicación del paquete en una rama huérfana (GitHub Pages).

The packaged output is committed into a throwaway repository created in a
temporary directory, so the working tree of the project is never touched.
The branch therefore always has a single commit and is force-pushed.
"""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from adapters.process_runner import tail_text
from core.errors import DeployError, ToolNotFoundError

NOJEKYLL = ".nojekyll"


@dataclass
class DeployTarget:
    remote_url: str
    branch: str = "gh-pages"
    message: str = "Deploy to GitHub Pages"
    user_name: str = "GitHub Actions"
    user_email: str = "actions@github.com"


@dataclass
class DeployOutcome:
    remote_url: str
    branch: str
    commit: str
    files: int


class GitDeployer:
    def __init__(self, git_bin: str = "git") -> None:
        found = shutil.which(git_bin)
        if not found:
            raise ToolNotFoundError(git_bin)
        self._git = found

    def _git_cmd(self, args: list[str], *, cwd: Path) -> str:
        cmd = [self._git, *args]
        logger.debug("$ {} (cwd={})", " ".join(cmd), cwd)
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            check=False,
        )
        if proc.returncode != 0:
            detail = tail_text(proc.stderr or proc.stdout, 2000).strip()
            raise DeployError(
                f"git {args[0]} failed ({proc.returncode}): {detail}",
                exit_code=proc.returncode,
            )
        return proc.stdout.strip()

    def remote_url(self, remote: str, *, repo: Path) -> str:
        """Resolve a remote name of `repo`; URLs and paths pass through."""

        if "://" in remote or remote.startswith("git@"):
            return remote
        if remote.startswith(("/", ".")):
            # The push runs from a temp dir, so local paths must be absolute.
            return str((repo / remote).resolve())
        return self._git_cmd(["remote", "get-url", remote], cwd=repo)

    def publish(self, *, package_dir: Path, target: DeployTarget) -> DeployOutcome:
        package_dir = package_dir.resolve()
        if not package_dir.is_dir() or not any(package_dir.iterdir()):
            raise DeployError(f"Nothing to deploy: {package_dir} is missing or empty")

        with tempfile.TemporaryDirectory(prefix="blog-deploy-") as tmp:
            work = Path(tmp) / "site"
            shutil.copytree(package_dir, work, symlinks=True)
            (work / NOJEKYLL).touch()

            self._git_cmd(["init", "--quiet"], cwd=work)
            # Unborn branch: the first commit has no parent (orphan history).
            self._git_cmd(["symbolic-ref", "HEAD", f"refs/heads/{target.branch}"], cwd=work)
            self._git_cmd(["config", "user.name", target.user_name], cwd=work)
            self._git_cmd(["config", "user.email", target.user_email], cwd=work)
            self._git_cmd(["config", "commit.gpgsign", "false"], cwd=work)
            self._git_cmd(["add", "--all", "."], cwd=work)
            self._git_cmd(["commit", "--quiet", "-m", target.message], cwd=work)
            commit = self._git_cmd(["rev-parse", "HEAD"], cwd=work)
            files = len(self._git_cmd(["ls-files"], cwd=work).splitlines())

            logger.info("Pushing {} ({} files) to {} {}", commit[:12], files, target.remote_url, target.branch)
            self._git_cmd(
                ["push", "--force", "--quiet", target.remote_url, f"HEAD:refs/heads/{target.branch}"],
                cwd=work,
            )

        return DeployOutcome(remote_url=target.remote_url, branch=target.branch, commit=commit, files=files)
