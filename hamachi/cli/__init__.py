"""
Command Line Interface for Hamachi.

Models are addressed as ``module:Class`` or ``path/to/models.py:Class``.
"""

import importlib
import importlib.util
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

import structlog
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import codec
from ..exceptions import HamachiError, MalformedSnapshotError, format_mismatch
from ..log import configure_logging
from ..model import Model

app = typer.Typer(help="Hamachi - type-checked models for JSON data")
console = Console()
logger = structlog.get_logger()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Log level, e.g. DEBUG"),
    log_format: Optional[str] = typer.Option(None, help="Log format: json or console"),
):
    """Hamachi - type-checked models for JSON data."""
    configure_logging(log_level, log_format)


def load_model(target: str) -> Type[Model]:
    """Import the model class named by ``module:Class`` or ``file.py:Class``."""
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise typer.BadParameter(f"expected module:Class, got {target!r}")

    if module_name.endswith(".py"):
        path = Path(module_name)
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise typer.BadParameter(f"cannot load models from {module_name}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    else:
        module = importlib.import_module(module_name)

    model = getattr(module, attribute, None)
    if not (isinstance(model, type) and issubclass(model, Model)):
        raise typer.BadParameter(f"{target} is not a model class")
    return model


def collect_errors(model: Type[Model], record: Any) -> List[str]:
    """All error messages for one record, nested fields as dotted paths."""
    instance = model.from_snapshot(record, check_types=False)
    if not isinstance(instance, Model):
        return [f"expected an object, got {record!r}"]
    return _nested_errors(instance, "")


def _nested_errors(instance: Model, prefix: str) -> List[str]:
    messages = [
        format_mismatch(prefix + error.field_name, error.expected, error.value)
        for error in instance.field_errors()
    ]
    for name in instance.fields:
        value = getattr(instance, name)
        if isinstance(value, Model):
            messages.extend(_nested_errors(value, f"{prefix}{name}."))
        elif isinstance(value, list):
            for index, each in enumerate(value):
                if isinstance(each, Model):
                    messages.extend(_nested_errors(each, f"{prefix}{name}[{index}]."))
    return messages


def _read_snapshot(file: Path) -> Any:
    try:
        return codec.decode(file.read_text(encoding="utf-8"))
    except MalformedSnapshotError as e:
        logger.error("snapshot_malformed", file=str(file), error=e.message)
        console.print(f"❌ {escape(str(file))}: {escape(e.message)}")
        raise typer.Exit(code=2)


@app.command()
def describe(
    target: str = typer.Argument(..., help="Model as module:Class or file.py:Class"),
):
    """Show the fields of a model."""
    model = load_model(target)

    table = Table(
        title=escape(model.describe()), show_header=True, header_style="bold magenta"
    )
    table.add_column("Field", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Default")

    for name, type_ in model.fields.items():
        table.add_row(name, escape(type_.describe()), escape(repr(type_.default_value())))

    console.print(table)


@app.command()
def validate(
    target: str = typer.Argument(..., help="Model as module:Class or file.py:Class"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
):
    """Report every validation error of the records in a JSON file."""
    model = load_model(target)
    snapshot = _read_snapshot(file)
    records = snapshot if isinstance(snapshot, list) else [snapshot]

    report: List[Dict[str, Any]] = [
        {"record": index, "errors": collect_errors(model, record)}
        for index, record in enumerate(records)
    ]
    invalid = [entry for entry in report if entry["errors"]]
    logger.info(
        "validation_complete",
        model=model.describe(),
        records=len(report),
        invalid=len(invalid),
    )

    if as_json:
        typer.echo(codec.encode(report))
    elif not invalid:
        console.print(f"✅ {len(report)} record(s) valid")
    else:
        table = Table(title="Validation errors", show_header=True, header_style="bold red")
        table.add_column("Record", style="cyan")
        table.add_column("Error")
        for entry in invalid:
            for message in entry["errors"]:
                table.add_row(str(entry["record"]), escape(message))
        console.print(table)

    if invalid:
        raise typer.Exit(code=1)


@app.command()
def prune(
    target: str = typer.Argument(..., help="Model as module:Class or file.py:Class"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    indent: Optional[int] = typer.Option(None, help="Indent the JSON output"),
):
    """Print the records of a JSON file without default-valued fields."""
    model = load_model(target)
    snapshot = _read_snapshot(file)
    try:
        if isinstance(snapshot, list):
            result: Any = [model.from_snapshot(each) for each in snapshot]
        else:
            result = model.from_snapshot(snapshot)
    except HamachiError as e:
        logger.error("snapshot_invalid", file=str(file), error=e.message)
        console.print(f"❌ {escape(e.message)}")
        raise typer.Exit(code=1)

    for each in result if isinstance(result, list) else [result]:
        if isinstance(each, Model):
            each.prune_default_values()
    typer.echo(codec.encode(result, indent=indent))
