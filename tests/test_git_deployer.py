from __future__ import annotations

import shutil
import subprocess

import pytest

from adapters.git_deployer import DeployTarget, GitDeployer
from core.errors import DeployError, ToolNotFoundError

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(shutil.which("git") is None, reason="git not installed"),
]


def _git(*args, cwd) -> str:
    return subprocess.run(["git", *args], cwd=str(cwd), check=True, capture_output=True, text=True).stdout.strip()


@pytest.fixture
def bare_remote(tmp_path):
    remote = tmp_path / "remote.git"
    remote.mkdir()
    _git("init", "--bare", "--quiet", cwd=remote)
    return remote


@pytest.fixture
def package(tmp_path):
    out = tmp_path / "result"
    (out / "post").mkdir(parents=True)
    (out / "index.html").write_text("<h1>home</h1>", encoding="utf-8")
    (out / "post" / "index.html").write_text("<h1>post</h1>", encoding="utf-8")
    return out


def test_publish_creates_single_orphan_commit(bare_remote, package):
    deployer = GitDeployer()
    target = DeployTarget(remote_url=str(bare_remote), branch="gh-pages", message="Deploy to GitHub Pages")

    outcome = deployer.publish(package_dir=package, target=target)

    assert outcome.files == 3
    assert _git("rev-parse", "gh-pages", cwd=bare_remote) == outcome.commit
    assert _git("rev-list", "--count", "gh-pages", cwd=bare_remote) == "1"
    assert _git("log", "-1", "--format=%s|%an|%ae", "gh-pages", cwd=bare_remote) == (
        "Deploy to GitHub Pages|GitHub Actions|actions@github.com"
    )
    files = _git("ls-tree", "-r", "--name-only", "gh-pages", cwd=bare_remote).splitlines()
    assert sorted(files) == [".nojekyll", "index.html", "post/index.html"]


def test_redeploy_replaces_history_and_removed_pages(bare_remote, package):
    deployer = GitDeployer()
    target = DeployTarget(remote_url=str(bare_remote))
    deployer.publish(package_dir=package, target=target)

    shutil.rmtree(package / "post")
    deployer.publish(package_dir=package, target=target)

    assert _git("rev-list", "--count", "gh-pages", cwd=bare_remote) == "1"
    files = _git("ls-tree", "-r", "--name-only", "gh-pages", cwd=bare_remote).splitlines()
    assert "post/index.html" not in files


def test_package_dir_is_left_untouched(bare_remote, package):
    GitDeployer().publish(package_dir=package, target=DeployTarget(remote_url=str(bare_remote)))

    assert not (package / ".git").exists()
    assert not (package / ".nojekyll").exists()


def test_remote_name_is_resolved_from_project_repo(tmp_path, bare_remote):
    project = tmp_path / "project"
    project.mkdir()
    _git("init", "--quiet", cwd=project)
    _git("remote", "add", "origin", str(bare_remote), cwd=project)

    deployer = GitDeployer()

    assert deployer.remote_url("origin", repo=project) == str(bare_remote)
    assert deployer.remote_url("https://example.org/blog.git", repo=project) == "https://example.org/blog.git"
    with pytest.raises(DeployError):
        deployer.remote_url("upstream", repo=project)


def test_empty_package_is_refused(tmp_path, bare_remote):
    empty = tmp_path / "empty"
    empty.mkdir()

    with pytest.raises(DeployError):
        GitDeployer().publish(package_dir=empty, target=DeployTarget(remote_url=str(bare_remote)))


def test_push_failure_carries_git_status(tmp_path, package):
    with pytest.raises(DeployError) as excinfo:
        GitDeployer().publish(package_dir=package, target=DeployTarget(remote_url=str(tmp_path / "no-such-remote")))

    assert excinfo.value.exit_code != 0


def test_missing_git_binary():
    with pytest.raises(ToolNotFoundError):
        GitDeployer("definitely-not-git")


def test_remote_name_wins_over_cwd_directory(tmp_path, bare_remote, monkeypatch):
    project = tmp_path / "project"
    project.mkdir()
    _git("init", "--quiet", cwd=project)
    _git("remote", "add", "origin", str(bare_remote), cwd=project)
    workdir = tmp_path / "elsewhere"
    (workdir / "origin").mkdir(parents=True)
    monkeypatch.chdir(workdir)

    assert GitDeployer().remote_url("origin", repo=project) == str(bare_remote)


def test_relative_remote_path_is_resolved_against_project(tmp_path, bare_remote):
    project = tmp_path / "project"
    project.mkdir()

    resolved = GitDeployer().remote_url("../remote.git", repo=project)

    assert resolved == str(bare_remote.resolve())
