#!/usr/bin/env python3

import json
import sys

import click

from satisfy.cli_utils import standard_command, add_common_options
from satisfy.config import logger
from satisfy.domain import PackageSource
from satisfy.infra import GitClient, load_packages, load_repo_definition, write_manifest
from satisfy.render import render_versions_table
from satisfy.services import BuildService, BuildOptions


@click.group()
@click.version_option(package_name='satisfy')
def cli():
    """satisfy - Generate satis package definitions from git tags and branches.

    Lists the tags and branches of each configured repository and writes a
    satis.json with one package entry per published version.
    """
    pass


def _git_client(config):
    git = config.get('git', {})
    return GitClient(
        binary=git.get('binary', 'git'),
        timeout=int(git.get('timeout_seconds', 60))
    )


def _build_options(config, strict=None, sort_versions=None, branches=None, jobs=None):
    """Settings-derived options with command-line flags taking precedence."""
    options = BuildOptions.from_config(config)
    if strict is not None:
        options.strict = strict
    if sort_versions is not None:
        options.sort_versions = sort_versions
    if branches is not None:
        options.include_branches = branches
    if jobs is not None:
        options.parallel = max(1, jobs)
    return options


@cli.command(name='build')
@click.argument('packages_file', type=click.Path(dir_okay=False))
@click.argument('repo_file', type=click.Path(dir_okay=False))
@click.option('-o', '--output', type=click.Path(dir_okay=False), default=None,
              help='Write the manifest to this file instead of stdout')
@click.option('--strict/--no-strict', default=None,
              help='Fail when a package has no qualifying versions')
@click.option('--sort/--no-sort', 'sort_versions', default=None,
              help='Order versions ascending instead of listing order')
@click.option('--branches/--no-branches', default=None,
              help='Publish branches as dev- versions')
@click.option('-j', '--jobs', type=int, default=None,
              help='Number of remotes listed concurrently')
@add_common_options('verbose', 'quiet')
@standard_command
def build_handler(packages_file, repo_file, output, strict, sort_versions, branches, jobs,
                  config, **kwargs):
    """Build a satis manifest.

    PACKAGES_FILE: package name -> {url, minversion, defaults}

    REPO_FILE: base satis.json; must contain a repositories member

    \b
    Examples:
        satisfy build packages.json satis-base.json > satis.json
        satisfy build packages.json satis-base.json -o satis.json --sort
        satisfy build packages.yaml satis-base.json --strict -j 4
    """
    repo_definition = load_repo_definition(repo_file)
    sources = load_packages(packages_file)

    service = BuildService(
        git_client=_git_client(config),
        options=_build_options(config, strict, sort_versions, branches, jobs)
    )
    manifest = service.build(sources, repo_definition)

    summary = service.last_summary
    logger.info(f"{summary.total} packages from {len(sources)} sources")
    if summary.empty:
        logger.info(f"No versions: {', '.join(summary.empty)}")

    write_manifest(manifest, output)


@cli.command(name='refs')
@click.argument('url')
@click.option('--min-version', default=None, help='Minimum version to apply')
@click.option('--sort/--no-sort', 'sort_versions', default=None,
              help='Order versions ascending instead of listing order')
@click.option('--branches/--no-branches', default=None,
              help='Include branches as dev- versions')
@click.option('--table/--no-table', default=None,
              help='Display as formatted table (auto-detected by default)')
@add_common_options('verbose', 'quiet')
@standard_command
def refs_handler(url, min_version, sort_versions, branches, table, config, **kwargs):
    """Show the versions satisfy would publish for a remote.

    URL: git URL of the repository

    \b
    Examples:
        satisfy refs https://github.com/acme/widget.git
        satisfy refs https://github.com/acme/widget.git --min-version 2.0
        satisfy refs git@example.com:acme/widget.git --no-table
    """
    if table is None:
        table = sys.stdout.isatty()

    source = PackageSource.from_config(url, {'url': url, 'minversion': min_version})
    service = BuildService(
        git_client=_git_client(config),
        options=_build_options(config, sort_versions=sort_versions, branches=branches)
    )
    rows = service.describe(source)

    if table:
        render_versions_table(rows, title=url)
        return None
    return rows


@cli.group(name='config')
def config_cmd():
    """Inspect satisfy settings."""
    pass


@config_cmd.command(name='show')
@add_common_options('verbose', 'quiet')
@standard_command
def config_show(config, **kwargs):
    """Print the effective settings as JSON."""
    click.echo(json.dumps(config, indent=2))


def main():
    cli()


if __name__ == "__main__":
    main()
