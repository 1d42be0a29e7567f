"""Console script for pd-trigger."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console

from ._client import EventsClient
from ._constants import EXIT_USAGE
from ._config import load_config
from ._env_helpers import config_candidates, local_hostname, local_username
from ._errors import ConfigError, SubmissionError
from ._event import build_event, new_dedup_key
from ._log import setup_logging
from ._models import Severity
from ._report import Reporter

app = typer.Typer(
    add_completion=False,
    context_settings={'help_option_names': ['-h', '--help']},
)
console = Console(highlight=False)


def _severity_callback(value: str) -> Severity:
    try:
        return Severity.from_prefix(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _help_setup_callback(value: bool) -> None:
    if value:
        Reporter(console).setup_help()
        raise typer.Exit()


@app.command(
    epilog='Config is read from the first of: --config, ~/.pd.yml, '
           '$XDG_CONFIG_HOME/pagerduty.yml (~/.config/pagerduty.yml), '
           '$XDG_CONFIG_DIRS/pagerduty.yml (/etc/xdg/pagerduty.yml).',
)
def main(
    ctx: typer.Context,
    summary: Annotated[Optional[List[str]], typer.Argument(
        metavar='SUMMARY',
        help='Incident summary; multiple words are joined with spaces.',
        show_default=False,
    )] = None,
    config: Annotated[Optional[Path], typer.Option(
        '-c', '--config',
        metavar='PATH',
        help='Alternative .yml configuration file, tried before the defaults.',
    )] = None,
    key: Annotated[Optional[str], typer.Option(
        '-k', '--key',
        help='Event deduplication key (default: random).',
    )] = None,
    severity: Annotated[str, typer.Option(
        '-s', '--severity',
        callback=_severity_callback,
        help='One of: c, w, e, i (critical, warning, error, info).',
    )] = Severity.INFO.value,
    source: Annotated[Optional[str], typer.Option(
        '-S', '--source',
        help='Event source (default: current hostname).',
    )] = None,
    debug: Annotated[bool, typer.Option(
        '--debug',
        help='Print verbose debug info useful for troubleshooting.',
    )] = False,
    help_setup: Annotated[bool, typer.Option(
        '--help-setup',
        is_eager=True,
        callback=_help_setup_callback,
        help='Print help about setting up the config/integration and exit.',
    )] = False,
):
    """Trigger a PagerDuty incident with the given SUMMARY."""
    setup_logging(debug)
    reporter = Reporter(console, debug=debug)

    text = ' '.join(summary or [])
    if not text:
        reporter.usage_error(ctx.get_usage(), 'Missing SUMMARY.')
        raise typer.Exit(code=EXIT_USAGE)

    try:
        loaded = load_config(config_candidates(config), debug=debug)
    except ConfigError as e:
        reporter.config_error(e)
        raise typer.Exit(code=e.exit_code) from e

    hostname = local_hostname()
    event = build_event(
        text,
        routing_key=loaded.config.integration_key,
        source=source or hostname,
        severity=Severity(severity),
        dedup_key=key or new_dedup_key(),
        hostname=hostname,
        username=local_username(),
        timestamp=datetime.now().astimezone(),
    )

    # tests swap in a fake client via `CliRunner.invoke(..., obj=...)`
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    client_factory = obj.get('client_factory', EventsClient.from_config)
    client = client_factory(loaded.config, debug=debug)

    try:
        dedup_key = client.send_event(event)
    except SubmissionError as e:
        reporter.failure(e, client.last_response())
        raise typer.Exit(code=e.exit_code) from e

    reporter.success(dedup_key, client.last_response())


if __name__ == '__main__':
    app()
