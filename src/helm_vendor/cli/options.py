"""Shared CLI options."""

from __future__ import annotations

import typer

from helm_vendor.config.settings import settings

OutputOption = typer.Option(
    settings.default_output, "--output", "-o", help="Output format: table, json, yaml (env: HVM_OUTPUT)",
)
ChartOption = typer.Option(..., "--chart", "-c", help="Name of the chart, e.g. keycloak")
VersionOption = typer.Option(..., "--version", "-v", help="Chart version, e.g. 2.1.0")
DirOption = typer.Option(..., "--dir", "-d", help="Charts directory holding <chart>/<version>/ trees")
