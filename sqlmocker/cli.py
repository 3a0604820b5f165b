"""Command-line interface for SQLMocker."""

import click
import json
import logging
import sys
import yaml
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from sqlmocker.core.generator import StatementGenerator
from sqlmocker.core.models import GenerationConfig, RunConfig, StatementKind
from sqlmocker.core.parser import parse_create_table
from sqlmocker.core.writer import StatementWriter, split_ddl_script


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

KIND_CHOICES = [kind.value for kind in StatementKind]


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
def cli(verbose: bool, quiet: bool):
    """SQLMocker - Generate randomized SQL statements from CREATE TABLE schemas."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif quiet:
        logging.getLogger().setLevel(logging.ERROR)


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load configuration from JSON or YAML file."""
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, 'r') as f:
        if config_file.suffix.lower() == '.json':
            return json.load(f)
        else:
            return yaml.safe_load(f) or {}


def build_run_config(config_data: Dict[str, Any], ddl: Tuple[str, ...], ddl_file: Optional[str],
                     count: Optional[int], output: Optional[str], seed: Optional[int],
                     kinds: Tuple[str, ...]) -> RunConfig:
    """Merge command-line options over configuration file values."""
    data = dict(config_data)

    if ddl or ddl_file:
        tables = list(ddl)
        if ddl_file:
            tables.extend(split_ddl_script(Path(ddl_file).read_text()))
        data['tables'] = tables
    if count is not None:
        data['record_count'] = count
    if output:
        data['output_path'] = output
    if seed is not None:
        data['generation'] = {**(data.get('generation') or {}), 'seed': seed}
    if kinds:
        configured = data.get('statement_weights') or {}
        data['statement_weights'] = {kind: configured.get(kind, 1.0) for kind in kinds}

    return RunConfig(**data)


@cli.command()
@click.option('--ddl', multiple=True, help='CREATE TABLE statement (repeatable)')
@click.option('--ddl-file', type=click.Path(exists=True), help='File with CREATE TABLE statements separated by ;')
@click.option('--count', '-n', type=int, envvar='NUM_RECORDS', help='Number of statements to write [env: NUM_RECORDS]')
@click.option('--output', '-o', type=click.Path(), help='Output file (appended to)')
@click.option('--seed', type=int, help='Random seed for reproducible statements')
@click.option('--config', '-c', type=click.Path(exists=True), help='Configuration file (JSON/YAML)')
@click.option('--kind', 'kinds', multiple=True, type=click.Choice(KIND_CHOICES),
              help='Restrict to these statement kinds (repeatable)')
@click.option('--progress/--no-progress', default=True, help='Show a progress bar')
def generate(ddl: Tuple[str, ...], ddl_file: Optional[str], count: Optional[int], output: Optional[str],
             seed: Optional[int], config: Optional[str], kinds: Tuple[str, ...], progress: bool):
    """Append randomly generated statements to an output file."""
    try:
        config_data = load_config_file(config) if config else {}
        run_config = build_run_config(config_data, ddl, ddl_file, count, output, seed, kinds)

        writer = StatementWriter.from_config(run_config)
        stats = writer.write(run_config.output_path, run_config.record_count, show_progress=progress)

        click.echo(f"\n📊 Generation Results:")
        click.echo(f"  Output: {run_config.output_path}")
        click.echo(f"  Statements written: {stats.statements_written:,}")
        for kind, kind_count in sorted(stats.kind_counts.items()):
            click.echo(f"  • {kind}: {kind_count:,}")
        click.echo(f"  Time: {stats.total_time_seconds:.2f}s")
        click.echo("\n✅ Generation completed successfully!")

    except Exception as e:
        click.echo(f"\n❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('ddl')
@click.option('--format', 'output_format', default='yaml', type=click.Choice(['json', 'yaml']),
              help='Output format')
def parse(ddl: str, output_format: str):
    """Parse a CREATE TABLE statement and print the table model."""
    try:
        table_data = asdict(parse_create_table(ddl))
        if output_format == 'json':
            click.echo(json.dumps(table_data, indent=2))
        else:
            click.echo(yaml.dump(table_data, default_flow_style=False, sort_keys=False))

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument('ddl')
@click.argument('kind', type=click.Choice(KIND_CHOICES))
@click.option('--seed', type=int, help='Random seed for reproducible statements')
def render(ddl: str, kind: str, seed: Optional[int]):
    """Render a single statement of KIND for a CREATE TABLE statement."""
    try:
        table = parse_create_table(ddl)
        generator = StatementGenerator(GenerationConfig(seed=seed))
        click.echo(generator.render(table, StatementKind(kind)))

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
