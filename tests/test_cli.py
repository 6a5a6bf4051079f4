"""Tests for the Typer command-line interface."""

from __future__ import annotations

import json
import subprocess

from typer.testing import CliRunner

import mymoney.database as database_module
import mymoney.deploy as deploy_module
from mymoney import APP_NAME, APP_VERSION
from mymoney.cli import app
from tests.helpers.supabase_stub import StubSupabase

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert f"{APP_NAME} {APP_VERSION}" in result.output


def test_deploy_without_configuration_fails(tmp_path):
    result = runner.invoke(app, ["deploy", "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert "Deployment failed" in result.output


def test_deploy_with_undecodable_configuration_fails(tmp_path):
    (tmp_path / ".firebaserc").write_bytes(b'{"projects": {"default": "caf\xe9"}}')
    result = runner.invoke(app, ["deploy", "--root", str(tmp_path)])
    assert result.exit_code == 1
    assert "Deployment failed" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_deploy_lists_sites_when_ambiguous(tmp_path, monkeypatch):
    (tmp_path / ".firebaserc").write_text(
        json.dumps({
            "projects": {"default": "p"},
            "targets": {"p": {"hosting": {"a": ["a"], "b": ["b"]}}},
        }),
        encoding="utf-8",
    )
    monkeypatch.setattr(
        deploy_module.subprocess, "run",
        lambda command, cwd=None, check=False: subprocess.CompletedProcess(command, 0),
    )
    result = runner.invoke(app, ["deploy", "--root", str(tmp_path)])
    assert result.exit_code == 0
    assert "1. a" in result.output
    assert "2. b" in result.output


def test_setup_hosting(tmp_path):
    result = runner.invoke(
        app,
        ["setup-hosting", "--project-id", "my-money", "--site-id", "", "--root", str(tmp_path)],
    )
    assert result.exit_code == 0, result.output
    assert "Configured project: my-money" in result.output
    assert (tmp_path / ".firebaserc").exists()


def test_setup_hosting_rejects_bad_id(tmp_path):
    result = runner.invoke(
        app,
        ["setup-hosting", "--project-id", "Bad!", "--site-id", "", "--root", str(tmp_path)],
    )
    assert result.exit_code == 1
    assert "Invalid project ID" in result.output


def test_seed_categories_offline_fails():
    result = runner.invoke(app, ["seed-categories", "--email", "a@b.c", "--password", "pw"])
    assert result.exit_code == 1
    assert "Seeding failed" in result.output


def _online_stub(monkeypatch):
    stub = StubSupabase()
    stub.auth.add_user("alex@example.com", "pw")

    async def fake_create_client(url, key):
        return stub

    monkeypatch.setattr(database_module, "acreate_client", fake_create_client)
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
    return stub


def test_seed_categories_signs_out_after_seeding(monkeypatch):
    stub = _online_stub(monkeypatch)
    result = runner.invoke(
        app, ["seed-categories", "--email", "alex@example.com", "--password", "pw"],
    )
    assert result.exit_code == 0, result.output
    assert "Created 10 default categories." in result.output
    assert stub.auth.session is None


def test_seed_categories_signs_out_when_seeding_fails(monkeypatch):
    stub = _online_stub(monkeypatch)
    stub.fail("categories", "select", ConnectionError("connection reset"))
    result = runner.invoke(
        app, ["seed-categories", "--email", "alex@example.com", "--password", "pw"],
    )
    assert result.exit_code == 1
    assert "Seeding failed" in result.output
    assert stub.auth.session is None
