"""
Agent Catalog CLI - Command-line interface for agent definitions.

Usage:
    agent-catalog list --category infrastructure
    agent-catalog info documentation-writer
    agent-catalog validate --strict
    agent-catalog export --format yaml --output agents.yaml
    agent-catalog new api-designer --description "..." --category specialized --color green
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
import yaml

from agent_catalog import __version__


def _load_context(ctx: click.Context):
    """Build config and loader from the group options."""
    from agent_catalog.config import Config
    from agent_catalog.definitions import AgentLoader

    config = Config.load(ctx.obj.get("config_path"))
    if ctx.obj.get("agents_dir"):
        config.agents_dir = ctx.obj["agents_dir"]

    level = logging.DEBUG if ctx.obj.get("verbose") else config.logging.log_level
    logging.basicConfig(level=level, format=config.logging.log_format)

    loader = AgentLoader(config.agents_dir, pattern=config.pattern, recursive=config.recursive)
    return config, loader


def _fail(ctx: click.Context, message: str) -> None:
    click.echo(click.style(f"❌ Error: {message}", fg="red"), err=True)
    ctx.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "config_path", type=click.Path(exists=True, path_type=Path),
              help="Config file (default: ./agent_catalog.yaml)")
@click.option("--agents-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Directory of agent files")
@click.version_option(version=__version__, prog_name="agent-catalog")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path], agents_dir: Optional[Path]):
    """Agent Catalog - load, lint and export AI assistant agent definitions."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    ctx.obj["agents_dir"] = agents_dir


@cli.command("list")
@click.option("--category", "-c", help="Only agents in this category")
@click.pass_context
def list_agents(ctx: click.Context, category: Optional[str]):
    """List available agents."""
    _, loader = _load_context(ctx)

    definitions = loader.load_all()
    if category:
        definitions = [d for d in definitions if (d.category or "uncategorized") == category]

    if not definitions:
        click.echo("No agents found")
        return

    click.echo("\nAvailable agents:")
    for d in sorted(definitions, key=lambda d: d.name):
        click.echo(f"  • {d.name} [{d.category or 'uncategorized'}]: {d.description}")
    click.echo()


@cli.command()
@click.argument("name")
@click.pass_context
def info(ctx: click.Context, name: str):
    """Show agent details."""
    _, loader = _load_context(ctx)

    try:
        d = loader.load(name)
    except ValueError as e:
        _fail(ctx, str(e))
        return

    summary = loader.get_summary(d)
    tools = "all (inherited)" if d.tools is None else (", ".join(d.tools) or "none")

    click.echo(f"\n{d.name}:")
    click.echo(f"  Description: {d.description}")
    click.echo(f"  Category: {summary['category']}")
    click.echo(f"  Color: {d.color or '-'}")
    click.echo(f"  Model: {summary['model']}")
    click.echo(f"  Tools: {tools}")
    click.echo(f"  Instructions: {summary['instruction_words']} words")
    click.echo(f"  Source: {summary['source_path']}")
    click.echo()


@cli.command()
@click.pass_context
def categories(ctx: click.Context):
    """List categories and their agents."""
    from agent_catalog.definitions import AgentCatalog

    _, loader = _load_context(ctx)

    try:
        catalog = AgentCatalog.from_loader(loader)
    except ValueError as e:
        _fail(ctx, str(e))
        return

    click.echo()
    for category, names in catalog.categories().items():
        click.echo(f"{category} ({len(names)}):")
        for name in names:
            click.echo(f"  • {name}")
    click.echo()


@cli.command()
@click.option("--strict", is_flag=True, help="Treat warnings as failures")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.pass_context
def validate(ctx: click.Context, strict: bool, output_format: str):
    """Lint agent files: header completeness, unique names, broken references."""
    from agent_catalog.definitions import AgentValidator, Severity

    config, loader = _load_context(ctx)
    strict = strict or config.validation.strict

    definitions = loader.load_all()
    report = AgentValidator(config.validation).validate_all(definitions, loader.load_errors)
    passed = report.ok(strict=strict)

    if output_format == "json":
        result = report.to_dict()
        result["ok"] = passed
        click.echo(json.dumps(result, indent=2))
    else:
        for issue in report.issues:
            color = "red" if issue.severity == Severity.ERROR else "yellow"
            click.echo(click.style(str(issue), fg=color))
        status = "✅" if passed else "❌"
        click.echo(
            f"{status} {report.checked} agents checked: "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )

    if not passed:
        ctx.exit(1)


@cli.command()
@click.option("--format", "output_format", type=click.Choice(["json", "yaml"]), default="json")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Write to file instead of stdout")
@click.pass_context
def export(ctx: click.Context, output_format: str, output: Optional[Path]):
    """Export agents as the payload a host runtime consumes."""
    from agent_catalog.definitions import AgentCatalog

    _, loader = _load_context(ctx)

    try:
        catalog = AgentCatalog.from_loader(loader)
    except ValueError as e:
        _fail(ctx, str(e))
        return

    if loader.load_errors:
        for message in loader.load_errors.values():
            click.echo(click.style(f"❌ {message}", fg="red"), err=True)
        ctx.exit(1)
        return

    payload = catalog.to_payload()
    if output_format == "yaml":
        text = yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    if output:
        output.write_text(text, encoding="utf-8")
        click.echo(click.style(f"✅ Exported {len(catalog)} agents: {output}", fg="green"))
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument("name")
@click.option("--description", "-d", required=True, help="One-line summary")
@click.option("--category", "-c", required=True, help="Grouping tag (e.g., specialized)")
@click.option("--color", required=True, help="Display color")
@click.option("--tools", "-t", help="Comma-separated tool names (default: inherit all)")
@click.option("--model", "-m", help="Model identifier")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def new(
    ctx: click.Context,
    name: str,
    description: str,
    category: str,
    color: str,
    tools: Optional[str],
    model: Optional[str],
    force: bool,
):
    """Create a new agent file from a template."""
    from agent_catalog.config import LIBRARY_DIR
    from agent_catalog.definitions.types import normalize_tools
    from agent_catalog.scaffold import create_agent_file

    config, _ = _load_context(ctx)

    # Never write into the bundled library
    if Path(config.agents_dir).resolve() == LIBRARY_DIR.resolve():
        _fail(ctx, "No agents directory configured: pass --agents-dir or set agents.dir in the config file")
        return

    try:
        path = create_agent_file(
            config.agents_dir,
            name=name,
            description=description,
            category=category,
            color=color,
            tools=normalize_tools(tools),
            model=model,
            force=force,
            validation=config.validation,
        )
    except (ValueError, FileExistsError) as e:
        _fail(ctx, str(e))
        return

    click.echo(click.style(f"✅ Created: {path}", fg="green"))


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
