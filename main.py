from pathlib import Path
from urllib.parse import urlencode

import click
from loguru import logger

from thingstodo.config import (
    ALLOWED_LOG_LEVELS,
    ALLOWED_THEMES,
    CONFIG_FILE_PATH,
    load_config,
    merge_config_with_cli_args,
)
from thingstodo.ui.app import ThingsToDoApp
from thingstodo.ui.constants import LOCATION_QUERY_PARAM


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=str),
    help="CSV file with the activities to browse",
    default=None,
)
@click.option(
    "--city",
    type=str,
    help="Start with this city selected (ignored if no activity is in that city)",
    default=None,
)
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    help="Number of activities revealed per scroll step",
    default=None,
)
@click.option(
    "--sort-by-rating/--source-order",
    help="Show the best-rated activities first instead of the file order",
    default=None,
)
@click.option(
    "--search-location/--no-search-location",
    help="Whether the search box also matches activity locations",
    default=None,
)
@click.option(
    "--ark-api-key",
    type=str,
    help="API key for the itinerary generation service",
    default=None,
    envvar="ARK_API_KEY",
)
@click.option(
    "--theme",
    type=click.Choice(ALLOWED_THEMES, case_sensitive=False),
    help="Theme to use for the UI",
    default=None,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=str),
    help="Write logs to this file (the terminal is used by the UI)",
    default=None,
)
@click.option(
    "--log-level",
    type=click.Choice(ALLOWED_LOG_LEVELS, case_sensitive=False),
    help="Minimum level written to the log file",
    default=None,
)
@click.option(
    "--config",
    type=click.Path(exists=True, readable=True, path_type=str),
    help="Path to configuration file (default: ~/.thingstodo.config)",
    default=None,
)
def cli(
    ctx,
    data_file: str | None = None,
    city: str | None = None,
    page_size: int | None = None,
    sort_by_rating: bool | None = None,
    search_location: bool | None = None,
    ark_api_key: str | None = None,
    theme: str | None = None,
    log_file: str | None = None,
    log_level: str | None = None,
    config: str | None = None,
):
    """ThingsToDo - Browse travel activities and plan trips."""
    if ctx.invoked_subcommand is None:
        main(
            data_file=data_file,
            city=city,
            page_size=page_size,
            sort_by_rating=sort_by_rating,
            search_location=search_location,
            ark_api_key=ark_api_key,
            theme=theme,
            log_file=log_file,
            log_level=log_level,
            config=config,
        )


@cli.command()
@click.option(
    "--config",
    type=click.Path(path_type=str),
    help="Path to configuration file (default: ~/.thingstodo.config)",
    default=None,
)
def configure(config: str | None = None):
    """Interactive configuration setup for ThingsToDo"""
    import toml

    from thingstodo.config import AppConfig

    config_path = Path(config) if config else CONFIG_FILE_PATH

    click.echo("ThingsToDo Configuration Setup")
    click.echo("=" * 30)
    click.echo("Leave fields empty to use defaults or skip optional settings.")
    click.echo()

    existing_config = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                existing_config = toml.load(f)
            click.echo(f"Found existing configuration at {config_path}")
            click.echo()
        except (OSError, toml.TomlDecodeError) as e:
            click.echo(f"Ignoring unreadable configuration at {config_path}: {e}")

    new_config = {}

    # Data Configuration
    click.echo("Data Configuration:")
    click.echo("-" * 19)

    current = existing_config.get("data_file", "activities.csv")
    new_config["data_file"] = click.prompt("Activities CSV file", default=current, type=str).strip()

    current = existing_config.get("page_size", 9)
    new_config["page_size"] = click.prompt("Activities per page", default=current, type=click.IntRange(min=1))

    current = existing_config.get("sort_by_rating", False)
    new_config["sort_by_rating"] = click.confirm("Show best-rated activities first?", default=current)

    current = existing_config.get("search_location", True)
    new_config["search_location"] = click.confirm("Should search also match locations?", default=current)

    # Itinerary Configuration
    click.echo()
    click.echo("Itinerary Generation (leave the key empty to use the local planner only):")

    current = existing_config.get("ark_api_key", "")
    api_key = click.prompt("API key", default=current, show_default=False, hide_input=True, type=str).strip()
    if api_key:
        new_config["ark_api_key"] = api_key

    current = existing_config.get("ark_model", "")
    model = click.prompt("Model (optional)", default=current, show_default=bool(current), type=str).strip()
    if model:
        new_config["ark_model"] = model

    # Theme Configuration
    click.echo()
    click.echo("Theme Configuration:")
    click.echo("-" * 20)

    current_theme = existing_config.get("theme", ALLOWED_THEMES[0])
    click.echo("Available themes:")
    for i, theme in enumerate(ALLOWED_THEMES, 1):
        marker = " (current)" if theme == current_theme else ""
        click.echo(f"  {i}. {theme}{marker}")

    theme_choice = click.prompt(
        f"Select theme (1-{len(ALLOWED_THEMES)})",
        default=ALLOWED_THEMES.index(current_theme) + 1 if current_theme in ALLOWED_THEMES else 1,
        type=click.IntRange(1, len(ALLOWED_THEMES)),
    )
    new_config["theme"] = ALLOWED_THEMES[theme_choice - 1]

    # Validate configuration
    click.echo()
    try:
        AppConfig(**new_config)
        click.echo("✓ Configuration validated successfully!")
    except ValueError as e:
        click.echo(f"✗ Configuration validation failed: {e}")
        if not click.confirm("Save configuration anyway?"):
            click.echo("Configuration cancelled.")
            return

    # Save configuration
    click.echo()
    try:
        with open(config_path, "w") as f:
            toml.dump(new_config, f)
        click.echo(f"✓ Configuration saved to {config_path}")
    except OSError as e:
        click.echo(f"✗ Failed to save configuration: {e}")


def setup_logging(log_file: str | None, log_level: str) -> None:
    """Send logs to ``log_file`` only; stderr belongs to the UI."""
    logger.remove()
    if log_file:
        logger.add(log_file, level=log_level, rotation="1 MB", retention=3)


def main(city: str | None = None, config: str | None = None, **cli_args):
    """ThingsToDo - Browse travel activities and plan trips."""
    try:
        # Load configuration from file, CLI arguments take priority
        config_obj = merge_config_with_cli_args(load_config(config), **cli_args)
    except ValueError as e:
        raise click.ClickException(str(e))

    setup_logging(config_obj.log_file, config_obj.log_level)
    logger.info(f"Starting ThingsToDo with data file '{config_obj.data_file}'")

    initial_url = f"/?{urlencode({LOCATION_QUERY_PARAM: city})}" if city else "/"
    app = ThingsToDoApp(config_obj, initial_url=initial_url)
    app.run()


if __name__ == "__main__":
    cli()
