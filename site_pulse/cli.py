# === FILE: site_pulse/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the SitePulse scraper.

Commands:
  run       Fetch the URLs, aggregate the results and write both reports
  config    Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (default: configs/default.yaml, else built-in defaults)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (default: output.log_file from the config)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

run options:
  --url, -u URL       URL to fetch; repeatable, replaces the configured list
  --urls-file PATH    File with one URL per line, replaces the configured list
  --concurrency INT   Number of workers (override concurrency)
  --scan-timeout SEC  Deadline for the whole run (seconds)
  --json PATH         Where to save the JSON report
  --summary PATH      Where to save the text summary
  --template DIR      Directory with the summary.txt.j2 Jinja2 template
  --compact           Write the JSON report without indentation

Also:
  --version, -v       Show the SitePulse version

Example:
  site-pulse run -u example.com -u https://github.com --json out/results.json
"""
import asyncio
import sys
from pathlib import Path

import click

from site_pulse import __version__
from site_pulse.config import load_config
from site_pulse.engine import run_pipeline
from site_pulse.logger import init_logging
from site_pulse.report.json_report import render_json
from site_pulse.report.summary_report import render_summary
from site_pulse.utils import read_url_list

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitePulse, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (defaults to output.log_file from the config)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SitePulse CLI command group."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg
    ctx.obj['logging'] = dict(
        level=log_level,
        log_file=log_file if log_file else cfg.output.log_file,
        log_format=log_format,
    )


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--url', '-u', 'urls',
    multiple=True,
    help='URL to fetch (repeatable); replaces the configured list'
)
@click.option(
    '--urls-file', 'urls_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='File with one URL per line; replaces the configured list'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Number of concurrent workers (override concurrency)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Deadline for the whole run (seconds)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report here'
)
@click.option(
    '--summary', '-s', 'summary_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the text summary here'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with the summary.txt.j2 template'
)
@click.option(
    '--compact', is_flag=True,
    help='Write the JSON report without indentation'
)
@click.pass_context
def run(ctx, urls, urls_file, concurrency, scan_timeout, json_output, summary_output,
        template_dir, compact):
    """Fetch the URLs and write the JSON report and the summary."""
    cfg = ctx.obj['config']
    overrides = {}
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    if scan_timeout is not None:
        overrides['scan_timeout'] = scan_timeout
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    targets = list(urls)
    if urls_file is not None:
        try:
            targets.extend(read_url_list(urls_file))
        except OSError as e:
            print_error(f'Failed to read URL list: {e}')
    if not targets:
        targets = list(cfg.urls)
    if not targets:
        print_error('No URLs to fetch: pass --url/--urls-file or set "urls" in the config')

    logger = init_logging(**ctx.obj['logging'])
    logger.info("Scraper started")
    try:
        report = asyncio.run(run_pipeline(targets, cfg))
    except Exception as e:
        logger.error("Scraping failed: %s", e)
        print_error(f'Scraping failed: {e}')

    json_path = json_output or cfg.output.results_json
    summary_path = summary_output or cfg.output.summary_txt
    try:
        saved_json = render_json(report, json_path, pretty=not compact)
        saved_summary = render_summary(report, summary_path, template_dir)
    except Exception as e:
        print_error(f'Failed to save reports: {e}')

    logger.info("Results saved to %s and %s", saved_json, saved_summary)
    click.echo(f'Results saved to {saved_json} and {saved_summary}')
    logger.info("Session ended")


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
