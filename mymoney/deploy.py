"""
Static Hosting Deployment.

Builds the web front end and pushes it to Firebase Hosting.  The site
configuration file (``.firebaserc``) names the default project and,
optionally, named hosting targets::

    {
      "projects": {"default": "my-money-app"},
      "targets": {"my-money-app": {"hosting": {"my-money-site": ["my-money-site"]}}}
    }

With no targets the project's default site is deployed; with exactly one
target that site is deployed; with several, the caller must choose.
"""

from __future__ import annotations

import json
import re
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from mymoney.config import AppConfig, get_config
from mymoney.errors import MyMoneyError
from mymoney.logger import StructuredLogger, get_logger

_ID_RE: re.Pattern[str] = re.compile(r"^[a-z0-9-]+$")
_SITE_PLACEHOLDER: str = '"SITE_ID_PLACEHOLDER"'


class DeploymentError(MyMoneyError):
    """Site configuration or a build/deploy command failed."""


class HostingTargets(BaseModel):
    hosting: dict[str, list[str]] = Field(default_factory=dict)


class SiteConfig(BaseModel):
    """Parsed ``.firebaserc``."""

    projects: dict[str, str] = Field(default_factory=dict)
    targets: dict[str, HostingTargets] = Field(default_factory=dict)

    @property
    def default_project(self) -> Optional[str]:
        return self.projects.get("default") or None


class DeployResult(BaseModel):
    """Outcome of :func:`deploy`.

    ``deployed`` is ``False`` only when several sites are configured and
    none was selected; ``available_sites`` then lists the choices.
    """

    project_id: str
    site: Optional[str] = None
    deployed: bool
    available_sites: list[str] = Field(default_factory=list)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DeploymentError(f"Cannot read {path.name}: {exc}", original_error=exc) from exc


def _write_text(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise DeploymentError(f"Cannot write {path.name}: {exc}", original_error=exc) from exc


def load_site_config(path: Path) -> SiteConfig:
    """Read and validate the site configuration file.

    Raises:
        DeploymentError: Missing or unreadable file, malformed JSON or no
            default project.
    """
    if not path.exists():
        raise DeploymentError(
            f"{path.name} not found. Run 'mymoney setup-hosting' first."
        )
    text = _read_text(path)
    try:
        config = SiteConfig.model_validate_json(text)
    except ValidationError as exc:
        raise DeploymentError(f"{path.name} is not valid: {exc}", original_error=exc) from exc
    if config.default_project is None:
        raise DeploymentError(f"No default project found in {path.name}")
    return config


def resolve_hosting_sites(config: SiteConfig) -> list[str]:
    """Hosting target names configured for the default project, in file order."""
    project = config.default_project
    targets = config.targets.get(project) if project else None
    return list(targets.hosting) if targets else []


def _run(command: list[str], cwd: Path, logger: StructuredLogger) -> None:
    logger.info("Running: %s", shlex.join(command), extra={"event": "DEPLOY_STEP"})
    try:
        subprocess.run(command, cwd=cwd, check=True)
    except FileNotFoundError as exc:
        raise DeploymentError(f"Command not found: {command[0]}", original_error=exc) from exc
    except subprocess.CalledProcessError as exc:
        raise DeploymentError(
            f"'{shlex.join(command)}' exited with status {exc.returncode}",
            original_error=exc,
        ) from exc


def deploy(
    root: Path,
    site: Optional[str] = None,
    config: Optional[AppConfig] = None,
    logger: Optional[StructuredLogger] = None,
) -> DeployResult:
    """Build and deploy the front end found at *root*.

    Args:
        root: Project directory holding the site configuration.
        site: Hosting target to deploy when several are configured.

    Raises:
        DeploymentError: Bad configuration, unknown *site*, or a failed
            build/deploy command.
    """
    cfg = config or get_config()
    log = logger or get_logger("mymoney.deploy")

    site_config = load_site_config(root / cfg.SITE_CONFIG_FILE)
    project = site_config.default_project
    sites = resolve_hosting_sites(site_config)

    if site is not None and site not in sites:
        raise DeploymentError(
            f"Unknown hosting site '{site}'. Configured: {', '.join(sites) or 'none'}"
        )

    if site is None and len(sites) > 1:
        log.warning(
            "Multiple sites configured for %s; choose one with --site.", project,
        )
        return DeployResult(project_id=project, deployed=False, available_sites=sites)

    chosen = site or (sites[0] if sites else None)
    only = f"hosting:{chosen}" if chosen else "hosting"
    log.info(
        "Deploying %s to %s", project, chosen or "default site",
        extra={"event": "DEPLOY_START"},
    )

    _run(shlex.split(cfg.BUILD_COMMAND), root, log)
    _run([cfg.HOSTING_CLI, "deploy", "--only", only], root, log)

    log.info("Deployment complete.", extra={"event": "DEPLOY_DONE"})
    return DeployResult(project_id=project, site=chosen, deployed=True, available_sites=sites)


def setup_hosting(
    project_id: str,
    site_id: Optional[str] = None,
    root: Path = Path("."),
    config: Optional[AppConfig] = None,
    logger: Optional[StructuredLogger] = None,
) -> SiteConfig:
    """Write the site configuration and point ``firebase.json`` at the site.

    A hosting target is recorded only when *site_id* differs from
    *project_id*.  A missing ``firebase.json`` is created from
    ``firebase.json.sample`` when one exists, otherwise skipped.

    Raises:
        DeploymentError: An id contains anything but ``[a-z0-9-]``.
    """
    cfg = config or get_config()
    log = logger or get_logger("mymoney.deploy")

    project_id = project_id.strip()
    site_id = (site_id or "").strip() or project_id
    for label, value in (("project", project_id), ("site", site_id)):
        if not _ID_RE.match(value):
            raise DeploymentError(
                f"Invalid {label} ID '{value}'. Use only lowercase letters, "
                "numbers and hyphens."
            )

    site_config = SiteConfig(projects={"default": project_id})
    if site_id != project_id:
        site_config.targets[project_id] = HostingTargets(hosting={site_id: [site_id]})

    rc_path = root / cfg.SITE_CONFIG_FILE
    _write_text(
        rc_path,
        json.dumps(site_config.model_dump(exclude_defaults=True), indent=2) + "\n",
    )
    log.info("Wrote %s for project %s", rc_path.name, project_id)

    _update_hosting_config(root / cfg.HOSTING_CONFIG_FILE, project_id, site_id, log)
    return site_config


def _update_hosting_config(
    path: Path, project_id: str, site_id: str, logger: StructuredLogger,
) -> None:
    sample = path.with_name(path.name + ".sample")
    if not path.exists():
        if not sample.exists():
            logger.warning("%s not found; skipping hosting target update.", path.name)
            return
        try:
            shutil.copyfile(sample, path)
        except OSError as exc:
            raise DeploymentError(
                f"Cannot create {path.name} from {sample.name}: {exc}", original_error=exc,
            ) from exc
        logger.info("Created %s from %s", path.name, sample.name)

    text = _read_text(path).replace(_SITE_PLACEHOLDER, json.dumps(site_id))
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DeploymentError(f"{path.name} is not valid JSON: {exc}", original_error=exc) from exc

    if site_id != project_id:
        hosting = data.get("hosting")
        if isinstance(hosting, list) and hosting:
            hosting[0]["target"] = site_id
        elif isinstance(hosting, dict):
            hosting["target"] = site_id

    _write_text(path, json.dumps(data, indent=2) + "\n")
    logger.info("Updated %s hosting target: %s", path.name, site_id)
