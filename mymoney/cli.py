"""Command-line interface for My Money.

Typer console exposing deployment of the web front end, hosting setup,
seeding of the default category catalog, and the version banner.
Business logic lives in ``mymoney.deploy`` and the service layer; these
commands only parse options, report, and map failures to exit codes.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from mymoney import APP_NAME, APP_VERSION
from mymoney.deploy import DeploymentError, deploy, setup_hosting
from mymoney.errors import MyMoneyError

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=f"{APP_NAME} maintenance commands.",
)


ROOT_OPTION = typer.Option(
    "--root",
    help="Project directory holding the site configuration.",
    file_okay=False,
    dir_okay=True,
)


@app.command("deploy")
def deploy_cmd(
    site: Annotated[
        Optional[str], typer.Option(help="Hosting site to deploy when several exist.")
    ] = None,
    root: Annotated[Path, ROOT_OPTION] = Path("."),
) -> None:
    """Build the front end and deploy it to Firebase Hosting."""
    try:
        result = deploy(root=root, site=site)
    except DeploymentError as exc:
        typer.echo(f"Deployment failed: {exc.message}", err=True)
        raise typer.Exit(1) from exc

    if not result.deployed:
        typer.echo("Multiple sites configured. Choose one with --site:")
        for index, name in enumerate(result.available_sites, start=1):
            typer.echo(f"   {index}. {name}")
        return
    typer.echo(f"Deployed {result.project_id} ({result.site or 'default site'}).")


@app.command("setup-hosting")
def setup_hosting_cmd(
    project_id: Annotated[
        str, typer.Option(prompt="Firebase project ID", help="Firebase project ID.")
    ],
    site_id: Annotated[
        str,
        typer.Option(
            prompt="Hosting site ID (blank for the project's default site)",
            help="Hosting site ID; defaults to the project ID.",
        ),
    ] = "",
    root: Annotated[Path, ROOT_OPTION] = Path("."),
) -> None:
    """Write the hosting configuration for a Firebase project."""
    try:
        config = setup_hosting(project_id=project_id, site_id=site_id, root=root)
    except DeploymentError as exc:
        typer.echo(f"Setup failed: {exc.message}", err=True)
        raise typer.Exit(1) from exc

    typer.echo(f"Configured project: {config.default_project}")
    if config.targets:
        typer.echo(f"Hosting site: {site_id.strip()}")


async def _seed_categories(email: str, password: str) -> int:
    # Deferred import keeps ``deploy`` and ``version`` free of backend startup.
    from mymoney.context import AppContext

    ctx = await AppContext.create()
    try:
        if not ctx.db.is_online:
            raise MyMoneyError("Supabase is not configured (SUPABASE_URL / SUPABASE_ANON_KEY).")
        await ctx.auth.login(email, password)
        user = ctx.auth.state.user
        if user is None:
            raise MyMoneyError("Sign-in did not produce a session.")
        created = await ctx.services["category_service"].initialize_default_categories(user.id)
        return len(created)
    finally:
        if ctx.auth.state.is_authenticated:
            await ctx.auth.logout()
        await ctx.dispose()


@app.command("seed-categories")
def seed_categories_cmd(
    email: Annotated[str, typer.Option(prompt=True, help="Account email.")],
    password: Annotated[
        str, typer.Option(prompt=True, hide_input=True, help="Account password.")
    ],
) -> None:
    """Sign in and create the default categories if the account has none."""
    try:
        created = asyncio.run(_seed_categories(email, password))
    except MyMoneyError as exc:
        typer.echo(f"Seeding failed: {exc.message}", err=True)
        raise typer.Exit(1) from exc

    if created:
        typer.echo(f"Created {created} default categories.")
    else:
        typer.echo("Account already has categories; nothing to do.")


@app.command("version")
def version_cmd() -> None:
    """Print the application name and version."""
    typer.echo(f"{APP_NAME} {APP_VERSION}")


if __name__ == "__main__":  # pragma: no cover
    app()
