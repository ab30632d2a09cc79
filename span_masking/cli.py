"""CLI for inspecting span attribute masking."""
import click
import json
import logging
from pathlib import Path
from typing import Dict, Any, Tuple

from span_masking.domain.attributes import mask_attributes
from span_masking.domain.classifier import MASKING_RULES, classify
from span_masking.logging_hardening import setup_logging_redaction
from span_masking.settings import settings


def _parse_pair(pair: str) -> Tuple[str, str]:
    key, sep, value = pair.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"Expected KEY=VALUE, got: {pair}", param_hint="ATTRIBUTES")
    return key, value


def _load_attributes_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise click.ClickException(f"{path} must contain a JSON object of attributes")
    return data


@click.group()
@click.option("--log-level", default=None, help="Root log level (defaults to LOG_LEVEL)")
def cli(log_level: str):
    """Span attribute masking CLI."""
    logging.basicConfig(level=(log_level or settings.log_level).upper())
    if settings.log_redaction_enabled:
        setup_logging_redaction()


@cli.command("classify")
@click.argument("key")
@click.argument("value", required=False, default=None)
def classify_attribute(key: str, value: str):
    """Print the masking category for KEY (and optional VALUE)."""
    click.echo(classify(key, value).value)


@cli.command("mask")
@click.argument("attributes", nargs=-1)
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON file containing an object of attributes")
def mask(attributes: Tuple[str, ...], file_path: Path):
    """Mask KEY=VALUE attributes (or a JSON file) and print the result as JSON."""
    data: Dict[str, Any] = {}
    if file_path is not None:
        data.update(_load_attributes_file(file_path))

    for pair in attributes:
        key, value = _parse_pair(pair)
        data[key] = value

    if not data:
        raise click.UsageError("Provide KEY=VALUE attributes or --file")

    click.echo(json.dumps(mask_attributes(data), indent=2))


@cli.command("rules")
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
def list_rules(fmt: str):
    """List key rules in evaluation order."""
    rules = [
        {"order": i, "category": rule.category.value, "keywords": list(rule.keywords)}
        for i, rule in enumerate(MASKING_RULES, start=1)
    ]

    if fmt == "json":
        click.echo(json.dumps(rules, indent=2))
    else:
        click.echo(f"\n{'#':<4} {'Category':<16} {'Keywords':<40}")
        click.echo("-" * 60)
        for r in rules:
            click.echo(f"{r['order']:<4} {r['category']:<16} {', '.join(r['keywords']):<40}")


def main():
    cli()


if __name__ == "__main__":
    main()
