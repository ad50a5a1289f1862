"""
Command Line Interface for syscomp.
"""
import json
import logging
import os
import click
import yaml
from ..PARSERS.config_parser import ConfigParser
from ..RUNNERS.dependency_resolver import DependencyResolver
from ..RUNNERS.validator import validate_config
from ..errors import SyscompError

@click.group()
@click.option('--file', '-f', default='services.yml', help='Service configuration file path')
@click.option('--env-file', default=None, help='.env file used for ${VAR} interpolation')
@click.option('--log-level', envvar='SYSCOMP_LOG_LEVEL', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.pass_context
def cli(ctx, file, env_file, log_level):
    """
    syscomp - inspect service configuration.

    Reads a YAML or JSON file mapping service names to their configuration
    and reports on the dependency graph.
    """
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj['file'] = file
    ctx.obj['env_file'] = env_file

def _load(ctx):
    """
    Parses the configuration file, exiting with an error message when it cannot be used.
    """
    file = ctx.obj['file']
    if not os.path.exists(file):
        click.echo(f"Error: {file} not found.", err=True)
        ctx.exit(1)
    try:
        return ConfigParser(env_file=ctx.obj['env_file']).parse(file)
    except SyscompError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

@cli.command()
@click.pass_context
def check(ctx):
    """Validate the configuration and its dependency graph."""
    config = _load(ctx)
    try:
        validate_config(config)
        DependencyResolver().resolve_order(config)
    except SyscompError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(f"OK: {len(config)} services")

@cli.command()
@click.option('--reverse', '-r', is_flag=True, help='Print the stop order instead')
@click.pass_context
def order(ctx, reverse):
    """Print the start order"""
    config = _load(ctx)
    try:
        names = DependencyResolver().resolve_order(config)
    except SyscompError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    for name in (reversed(names) if reverse else names):
        click.echo(name)

@cli.command()
@click.argument('name')
@click.option('--dependents', is_flag=True, help='List the services depending on NAME instead')
@click.pass_context
def deps(ctx, name, dependents):
    """List direct dependencies of a service"""
    config = _load(ctx)
    if name not in config:
        click.echo(f"Error: Unknown service {name!r}", err=True)
        ctx.exit(1)
    if dependents:
        names = DependencyResolver().dependents_of(config, name)
    else:
        names = DependencyResolver().graph(config)[name]
    for dep in names:
        click.echo(dep)

@cli.command()
@click.option('--format', 'fmt', type=click.Choice(['json', 'yaml']), default='json')
@click.pass_context
def show(ctx, fmt):
    """Print the configuration"""
    config = _load(ctx)
    if fmt == 'json':
        click.echo(json.dumps(config, indent=2, default=str))
    else:
        click.echo(yaml.safe_dump(config, sort_keys=False), nl=False)

def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})

if __name__ == '__main__':
    main()
