"""Deploy orchestration: build (optional) then publish to the pages branch."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from adapters.git_deployer import DeployOutcome, DeployTarget, GitDeployer
from core.config import SiteSettings
from core.domain.models import BuildReport
from core.errors import StepFailedError
from core.interfaces.runner import CommandRunner
from core.services.build_pipeline import PipelineHooks, run_build


@dataclass
class DeployResult:
    build: BuildReport | None
    outcome: DeployOutcome


def deploy_target(settings: SiteSettings, deployer: GitDeployer) -> DeployTarget:
    return DeployTarget(
        remote_url=deployer.remote_url(settings.deploy_remote, repo=settings.root),
        branch=settings.deploy_branch,
        message=settings.deploy_message,
        user_name=settings.git_user_name,
        user_email=settings.git_user_email,
    )


def deploy(
    *,
    settings: SiteSettings,
    runner: CommandRunner,
    deployer: GitDeployer | None = None,
    skip_build: bool = False,
    hooks: PipelineHooks | None = None,
) -> DeployResult:
    deployer = deployer or GitDeployer(settings.git_bin)
    target = deploy_target(settings, deployer)

    report = None
    if not skip_build:
        report = run_build(settings=settings, runner=runner, hooks=hooks)
        if not report.success:
            raise StepFailedError(report.failed_step or "build", report.exit_code)

    outcome = deployer.publish(package_dir=settings.resolve(settings.package_dir), target=target)
    logger.info("Deployed {} to {}", outcome.commit[:12], outcome.branch)
    return DeployResult(build=report, outcome=outcome)
