import click
import json
import logging
import sys
from memfabric.config import LOG_LEVEL_DEFAULT, load_limits
from memfabric.models import ENTRY_TYPES
from memfabric.core.dispatch import content_schema
from memfabric.core.validation import validate_memory_entry, validate_typed

def load_json(value):
    if value == "-":
        return json.load(sys.stdin)
    if value.startswith("@"):
        with open(value[1:], 'r', encoding='utf-8') as f:
            return json.load(f)
    return json.loads(value)

@click.group()
@click.option('--log-level', default=LOG_LEVEL_DEFAULT, help='Log level (logs go to stderr).')
def cli(log_level):
    """memfabric CLI: validate memory-fabric entries."""
    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.WARNING),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        stream=sys.stderr)

@cli.command()
@click.argument('entry')
@click.option('--structure-only', is_flag=True, help='Only check the envelope and content schema.')
def validate(entry, structure_only):
    """Validate a memory entry (JSON string, @file or - for stdin)."""
    try:
        candidate = load_json(entry)
        limits = load_limits()
    except (OSError, ValueError) as e:
        click.echo(json.dumps({"status": "error", "message": str(e)}))
        sys.exit(2)

    if structure_only:
        result = validate_typed(candidate)
    else:
        result = validate_memory_entry(candidate, limits)

    click.echo(json.dumps({"status": "ok" if result.success else "invalid", "data": result.to_wire()}))
    if not result.success:
        sys.exit(1)

@cli.command()
def types():
    """List the memory entry types."""
    click.echo(json.dumps({"status": "ok", "data": list(ENTRY_TYPES)}))

@cli.command()
@click.argument('entry_type', type=click.Choice(ENTRY_TYPES))
def schema(entry_type):
    """Print the JSON Schema of an entry type's content."""
    click.echo(json.dumps({"status": "ok", "data": content_schema(entry_type).model_json_schema(by_alias=True)}))

if __name__ == '__main__':
    cli()
