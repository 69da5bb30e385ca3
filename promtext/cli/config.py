"""Configuration management CLI commands."""

import json
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from promtext.cli.output import print_error, print_info
from promtext.config import Settings, get_settings

app = typer.Typer(help="Configuration management")
console = Console()

SECTIONS = ("logging", "limits", "output")


@app.command("show")
def show_config(
    section: Optional[str] = typer.Option(
        None,
        "--section",
        "-s",
        help="Show specific section: logging, limits, output",
    ),
    format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table, yaml, json",
    ),
) -> None:
    """
    Show current configuration.

    Displays the effective settings after environment variables, the YAML
    config file and defaults have been merged.
    """
    if section and section not in SECTIONS:
        print_error(f"Unknown section: {section}")
        print_info(f"Available sections: {', '.join(SECTIONS)}")
        raise typer.Exit(1)

    config_dict = settings_to_dict(get_settings())
    if section:
        config_dict = {section: config_dict[section]}

    if format == "yaml":
        config_yaml = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
        console.print(Syntax(config_yaml, "yaml", theme="monokai"))
    elif format == "json":
        console.print(Syntax(json.dumps(config_dict, indent=2), "json", theme="monokai"))
    else:
        for section_name, values in config_dict.items():
            table = Table(
                title=f"{section_name.title()} Settings",
                show_header=True,
                header_style="bold cyan",
            )
            table.add_column("Setting", style="cyan", no_wrap=True)
            table.add_column("Value", style="white")
            for key, value in values.items():
                table.add_row(key, str(value))
            console.print(table)
            console.print()


def settings_to_dict(settings: Settings) -> dict:
    """Convert settings object to the nested layout of the YAML config file."""
    return {
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
        "limits": {
            "max_input_bytes": settings.max_input_bytes,
        },
        "output": {
            "json_indent": settings.json_indent,
            "sort_families": settings.sort_families,
        },
    }
