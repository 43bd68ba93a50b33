"""Main CLI entry point for the html-text command.

This module provides the Typer application with three commands: ``convert``
turns an HTML file (or stdin) into plain text, ``serve`` runs the HTTP
conversion service and ``init`` writes a default configuration file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from src.api.errors import ValidationError
from src.api.request_handler import HTML_REQUIRED_MESSAGE, validate_request
from src.api.server import run_server
from src.cli.errors import CLIError, InitError, InputError, OutputError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.config.config_loader import ConfigLoader
from src.config.errors import ConfigError, ConfigFileError
from src.config.models import ServiceConfig
from src.html_converter.html_to_text import HtmlToTextConverter
from src.models.conversion_options import ConversionOptions

VERSION = "0.1.0"

DEFAULT_CONFIG_FILE = "config.yaml"

app = typer.Typer(
    name="html-text",
    help="""Convert HTML to clean plain text.

QUICK START:
  html-text convert page.html                  # Print text to stdout
  html-text convert page.html -o page.txt      # Write text to a file
  cat page.html | html-text convert --stats    # Read stdin, show stats
  html-text serve --port 3000                  # Run the HTTP API
  html-text init                               # Write config.yaml""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


def _verbosity_to_level(verbosity: int) -> int:
    """Map a verbosity level (0=WARNING, 1=INFO, 2=DEBUG) to a logging level."""
    if verbosity == 0:
        return logging.WARNING
    elif verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def _configure_logging(level: int) -> None:
    """Configure the 'src' namespace logger.

    The root logger is left unchanged so third-party libraries keep their
    own settings.

    Args:
        level: Logging level for application loggers
    """
    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)8s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)


def _load_config(config_path: Optional[str]) -> ServiceConfig:
    """Load configuration from file and environment."""
    return ConfigLoader.from_environment(config_path)


def _read_html(input_file: Optional[Path]) -> str:
    """Read HTML from a file, or from stdin when no file is given.

    Raises:
        InputError: If the file is missing or not UTF-8 text
    """
    if input_file is None:
        try:
            return typer.get_text_stream("stdin").read()
        except UnicodeDecodeError:
            raise InputError("stdin", "input is not valid UTF-8 text")

    try:
        return input_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise InputError(str(input_file), "file not found")
    except UnicodeDecodeError:
        raise InputError(str(input_file), "file is not valid UTF-8 text")
    except OSError as e:
        raise InputError(str(input_file), str(e))


def _write_text(text: str, output_file: Optional[Path]) -> None:
    """Write converted text to a file, or to stdout when no file is given.

    Raises:
        OutputError: If the file cannot be written
    """
    if output_file is None:
        typer.echo(text)
        return

    try:
        output_file.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputError(str(output_file), str(e))


def _resolve_options(
    defaults: ConversionOptions,
    preserve_line_breaks: Optional[bool],
    remove_extra_spaces: Optional[bool],
    convert_entities: Optional[bool],
) -> ConversionOptions:
    """Combine command-line flags with configured defaults (flags win)."""
    return ConversionOptions(
        preserve_line_breaks=(
            defaults.preserve_line_breaks if preserve_line_breaks is None else preserve_line_breaks
        ),
        remove_extra_spaces=(
            defaults.remove_extra_spaces if remove_extra_spaces is None else remove_extra_spaces
        ),
        convert_entities=(
            defaults.convert_entities if convert_entities is None else convert_entities
        ),
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"html-text version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Convert HTML to clean plain text."""


@app.command()
def convert(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="HTML file to convert (reads stdin when omitted)",
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write text to this file instead of stdout",
        metavar="PATH",
    ),
    preserve_line_breaks: Optional[bool] = typer.Option(
        None,
        "--preserve-line-breaks/--no-preserve-line-breaks",
        help="Turn block elements (p, div, br, li, ...) into line breaks",
    ),
    remove_extra_spaces: Optional[bool] = typer.Option(
        None,
        "--remove-extra-spaces/--no-remove-extra-spaces",
        help="Collapse spaces and blank lines, trim each line",
    ),
    convert_entities: Optional[bool] = typer.Option(
        None,
        "--convert-entities/--no-convert-entities",
        help="Decode entities such as &amp; and &#65;",
    ),
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Show character and word statistics",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="YAML configuration file",
        metavar="PATH",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Convert an HTML file (or stdin) to plain text.

    \b
    EXAMPLES:
      html-text convert page.html
      html-text convert page.html --output converted-text.txt --stats
      html-text convert page.html --no-preserve-line-breaks
    """
    _configure_logging(_verbosity_to_level(verbosity))
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = _load_config(config_path)
        html = _read_html(input_file)
        if not html.strip():
            raise ValidationError(HTML_REQUIRED_MESSAGE, 'html')
        html, _ = validate_request({"html": html}, config)
        options = _resolve_options(
            config.default_options,
            preserve_line_breaks,
            remove_extra_spaces,
            convert_entities,
        )
        output.debug(f"Options: {options.to_dict()}")

        result = HtmlToTextConverter().convert(html, options)
        _write_text(result.text, output_file)

    except ValidationError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.VALIDATION_ERROR)

    except (ConfigError, ConfigFileError, CLIError) as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if output_file is not None:
        output.success(
            f"Converted successfully! Removed {result.characters_removed:,} characters."
        )
        output.info(f"  Output file: {output_file}")
    if not result.text.strip():
        output.warning("No text content found in the HTML")
    if stats:
        output.print_stats(result)

    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Interface to bind (overrides config)",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on (overrides config and PORT)",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="YAML configuration file",
        metavar="PATH",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=configured log level, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Run the HTTP conversion service (POST /api/html-to-text)."""
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = _load_config(config_path)
    except (ConfigError, ConfigFileError) as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if host is not None:
        config.host = host
    if port is not None:
        config.port = port

    if verbosity > 0:
        _configure_logging(_verbosity_to_level(verbosity))
    else:
        _configure_logging(logging.getLevelName(config.log_level))

    output.success(f"Serving on http://{config.host}:{config.port}/api/html-to-text")
    run_server(config)


@app.command()
def init(
    config_path: Path = typer.Argument(
        Path(DEFAULT_CONFIG_FILE),
        help="Where to write the configuration file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing configuration file",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Write a configuration file with the default settings.

    \b
    EXAMPLES:
      html-text init
      html-text init deploy/html-text.yaml --force
    """
    output = OutputHandler(no_color=no_color)

    try:
        if config_path.exists():
            if not force:
                raise InitError(str(config_path))
            output.warning(f"Overwriting existing configuration file {config_path}")
        ConfigLoader.save(str(config_path), ServiceConfig())

    except (ConfigFileError, CLIError) as e:
        logger.error(f"Init failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.success(f"Configuration initialized at {config_path}")


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
