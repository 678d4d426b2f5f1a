"""
CLI commands for SaaS Atlas (Click implementation).
"""

import sys
import click
import yaml
from typing import Optional

from saas_atlas.core.config import Config, DEFAULT_CONFIG, load_config
from saas_atlas.core.exceptions import ConfigurationError, HistoryError, CSVProcessingError
from saas_atlas.core.models import Company
from saas_atlas.csv_processor.reader import CompanyCSVReader
from saas_atlas.csv_processor.writer import CompanyCSVWriter
from saas_atlas.links.resources import LinkBuilder
from saas_atlas.search.grouping import group_by_category
from saas_atlas.search.history import JsonFileStorage, RecentSearches
from saas_atlas.store.client import SupabaseClient
from saas_atlas.store.loader import DirectoryLoader
from saas_atlas.utils.logging_config import setup_logging
from saas_atlas.view.directory import DirectoryOptions, DirectoryView


def _get_config(ctx: click.Context) -> Config:
    """Load configuration once per invocation, exiting on errors."""
    obj = ctx.ensure_object(dict)
    if obj.get('config') is None:
        overrides = None
        if obj.get('csv_path'):
            overrides = {'store': {'provider': 'csv', 'csv_path': obj['csv_path']}}
        try:
            config = load_config(obj.get('config_path'), overrides=overrides)
        except (ConfigurationError, ValueError) as e:
            click.echo(f"❌ Configuration error: {e}", err=True)
            sys.exit(1)
        setup_logging(config.logging_config, verbose=obj.get('verbose', False))
        obj['config'] = config
    return obj['config']


def _build_source(config: Config):
    store = config.store_config
    if store.get('provider') == 'csv':
        return CompanyCSVReader(store['csv_path'])
    return SupabaseClient(
        url=store['url'],
        api_key=store['api_key'],
        table=store.get('table', 'companies'),
        timeout=store.get('timeout', 30)
    )


def _build_link_builder(config: Config) -> LinkBuilder:
    links = config.links_config
    return LinkBuilder(
        logo_service=links.get('logo_service', 'logo.clearbit.com'),
        resource_paths=links.get('resource_paths')
    )


def _build_history(config: Config) -> RecentSearches:
    history = config.history_config
    storage = JsonFileStorage(history.get('file', 'data/recent_searches.json'))
    return RecentSearches(storage, limit=history.get('limit', 5))


def _get_view(ctx: click.Context, ranking: Optional[bool] = None) -> DirectoryView:
    """Build the directory view and load it, exiting when the load fails."""
    config = _get_config(ctx)
    options = DirectoryOptions.from_config(config.directory_config)
    if ranking is not None:
        options.ranking_enabled = ranking

    try:
        source = _build_source(config)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    view = DirectoryView(
        loader=DirectoryLoader(source),
        options=options,
        link_builder=_build_link_builder(config),
        history=_build_history(config)
    )
    view.activate()

    if view.load_failed:
        click.echo(f"❌ Could not load the company directory: {view.error}", err=True)
        sys.exit(1)

    return view


def _format_company(company: Company, score: Optional[int] = None) -> str:
    line = f"  {company.name} ({company.category})"
    if score is not None:
        line += f" [{score}]"
    return line


@click.command()
@click.option('--category', default=None, help='Only show companies in this category')
@click.option('--group/--no-group', default=None,
              help='Group companies by category (default from configuration)')
@click.pass_context
def browse(ctx: click.Context, category: Optional[str], group: Optional[bool]):
    """List every product in the directory."""
    view = _get_view(ctx)
    if group is not None:
        view.options.group_by_category = group

    click.echo(f"SaaS Atlas - {len(view.companies)} products")

    if not view.companies:
        click.echo("No products")
        return

    groups = view.grouped()
    if category is not None:
        matching = [name for name in view.categories if name.lower() == category.lower()]
        if not matching:
            click.echo(f"No products in category: {category}")
            return
        members = [c for c in view.visible_companies() if c.category == matching[0]]
        groups = {matching[0]: members}

    for heading, members in groups.items():
        click.echo(click.style(f"{heading} ({len(members)})", bold=True))
        for company in members:
            click.echo(_format_company(company))


@click.command()
@click.argument('query')
@click.option('--rank/--no-rank', default=None,
              help='Rank results by matched field (default from configuration)')
@click.option('--limit', default=0, type=click.IntRange(min=0),
              help='Maximum number of results to show (0 = all)')
@click.pass_context
def search(ctx: click.Context, query: str, rank: Optional[bool], limit: int):
    """Search products by name, category or description."""
    view = _get_view(ctx, ranking=rank)

    try:
        view.search(query, remember=True)
    except HistoryError as e:
        click.echo(f"⚠️  Warning: {e}", err=True)

    if not view.has_query:
        click.echo("Empty query, showing all products")
        for company in view.visible_companies():
            click.echo(_format_company(company))
        return

    results = view.results[:limit] if limit else view.results
    if not results:
        click.echo(f"No results for '{query}'")
        return

    click.echo(f"{view.title} ({len(view.results)})")
    for result in results:
        score = result.score if view.options.ranking_enabled else None
        click.echo(_format_company(result.company, score))


@click.command()
@click.argument('key')
@click.option('--intent', default=None,
              help='Only show resource links for this intent (requires intent filters)')
@click.pass_context
def show(ctx: click.Context, key: str, intent: Optional[str]):
    """Show a product's details, resources and related products."""
    view = _get_view(ctx)

    company = view.find(key)
    if company is None:
        click.echo(f"❌ Company not found: {key}", err=True)
        sys.exit(1)

    view.select(company)

    if intent is not None:
        if not view.options.intent_filters:
            click.echo("⚠️  Intent filters are disabled in configuration, showing all resources", err=True)
        else:
            try:
                view.set_intent(intent)
            except ValueError as e:
                click.echo(f"❌ {e}", err=True)
                sys.exit(1)

    click.echo(click.style(company.name, bold=True))
    click.echo(company.category)
    if company.description:
        click.echo(company.description)
    click.echo(f"Docs: {company.docs_url}")

    logo = view.logo_url()
    if logo:
        click.echo(f"Logo: {logo}")

    resources = view.resources()
    if resources:
        click.echo("Resources:")
        for link in resources:
            click.echo(f"  {link.label}: {link.url}")

    related = view.related()
    if related:
        click.echo("Related:")
        for other in related:
            click.echo(_format_company(other))


@click.command()
@click.pass_context
def categories(ctx: click.Context):
    """List product categories with their sizes."""
    view = _get_view(ctx)
    if not view.categories:
        click.echo("No products")
        return
    groups = group_by_category(view.companies)
    for name in sorted(groups):
        click.echo(f"  {name} ({len(groups[name])})")


@click.command()
@click.option('--clear', is_flag=True, help='Forget all recent searches')
@click.pass_context
def recent(ctx: click.Context, clear: bool):
    """Show recent searches."""
    history = _build_history(_get_config(ctx))

    if clear:
        try:
            history.clear()
        except HistoryError as e:
            click.echo(f"❌ {e}", err=True)
            sys.exit(1)
        click.echo("Recent searches cleared")
        return

    queries = history.list()
    if not queries:
        click.echo("No recent searches")
        return
    for query in queries:
        click.echo(f"  {query}")


@click.command()
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False),
              help='Path to output CSV file')
@click.option('--query', '-q', default=None, help='Only export products matching this query')
@click.option('--rank/--no-rank', default=None,
              help='Rank results by matched field (default from configuration)')
@click.pass_context
def export(ctx: click.Context, output: str, query: Optional[str], rank: Optional[bool]):
    """Export the directory (or search results) to CSV."""
    view = _get_view(ctx, ranking=rank)

    scores = None
    if query:
        view.search(query)
        if view.options.ranking_enabled:
            scores = {r.company.id: r.score for r in view.results}

    writer = CompanyCSVWriter(output, link_builder=view.link_builder)
    try:
        written = writer.write_companies(view.visible_companies(), scores=scores)
    except CSVProcessingError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(click.style("✅ SUCCESS", fg="green", bold=True) + f": Exported {written} products to {output}")


@click.group('config')
def config_commands():
    """Configuration management commands."""
    pass


@config_commands.command('show')
@click.pass_context
def config_show(ctx: click.Context):
    """Show current configuration."""
    config = _get_config(ctx)
    click.echo("Current Configuration:")
    click.echo(yaml.dump(config.get_all(), default_flow_style=False, sort_keys=False))


@config_commands.command('validate')
@click.pass_context
def config_validate(ctx: click.Context):
    """Validate configuration file."""
    config = _get_config(ctx)
    try:
        config.validate()
    except ValueError as e:
        click.echo(f"❌ Configuration validation failed: {e}", err=True)
        sys.exit(1)
    click.echo("✅ Configuration is valid")


@config_commands.command('example')
def config_example():
    """Show example configuration."""
    click.echo("Example Configuration:")
    click.echo(yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False))
    click.echo("\nTo use this configuration:")
    click.echo("1. Save to config/config.yaml")
    click.echo("2. Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables")
    click.echo("   (or set store.provider to csv and point store.csv_path at a snapshot)")
