"""
model_insight — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Read and validate the request file.
  4. Run the engine.
  5. Print an ASCII report, or the raw JSON payload with ``--json``.

Install and run::

    pip install -e .
    model-insight --help
    model-insight validate-config
    model-insight interpret request.json
    model-insight simulate scenario.json --json
    model-insight batch requests.json
    model-insight format-number 1234.5 --type accounting

Request files
-------------
interpret: ``{"model": {...}, "data": {"x": [[...]], "y": [...]}, "options": {}}``
simulate:  ``{"inputValues": {...}, "model": {...}, "dependentVariable": "..."}``
batch:     a JSON array of interpret requests
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="model-insight",
    help="Interpretation and what-if simulation for fitted regression and ensemble models.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from model_insight.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from model_insight.utils.logging import configure_logging
    configure_logging(config.logging)


def _read_json_or_exit(path: str) -> Any:
    """Parse a JSON request file, exiting with code 1 if missing or invalid."""
    request_path = Path(path)
    if not request_path.exists():
        typer.echo(f"[ERROR] Request file not found: {request_path}", err=True)
        raise typer.Exit(code=1)
    try:
        return json.loads(request_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] Invalid JSON in {request_path}: {exc}", err=True)
        raise typer.Exit(code=1)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Locale:             {config.formatting.locale}")
    typer.echo(f"  Default num format: {config.formatting.default_type}")
    typer.echo(f"  Significance level: {config.interpretation.significance_level}")
    typer.echo(f"  R² threshold:       {config.interpretation.r2_threshold}")
    typer.echo(f"  Non-negative names: {len(config.simulation.non_negative_targets)}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("interpret")
def interpret(
    request_file: str = typer.Argument(..., help="JSON file with {model, data?, options?}."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result payload."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Interpret a fitted linear or random forest model.

    Exits with code 1 when the model cannot be interpreted.
    """
    from model_insight.interpretation.service import interpret_model
    from model_insight.reporting.formatters import format_interpretation_report

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    request = _read_json_or_exit(request_file)
    if not isinstance(request, dict):
        typer.echo("[ERROR] Request must be a JSON object.", err=True)
        raise typer.Exit(code=1)

    result = interpret_model(
        request.get("model"),
        request.get("data"),
        request.get("options"),
        significance_level=config.interpretation.significance_level,
        r2_threshold=config.interpretation.r2_threshold,
        locale=config.formatting.locale,
    )

    if as_json:
        _echo_json(result.to_payload())
    else:
        typer.echo(format_interpretation_report(result, locale=config.formatting.locale))

    if not result.success:
        raise typer.Exit(code=1)


@app.command("simulate")
def simulate(
    request_file: str = typer.Argument(
        ..., help="JSON file with {inputValues, model, dependentVariable}."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result payload."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Simulate a what-if scenario on a linear model.

    Accepts camelCase (``inputValues``, ``dependentVariable``) or snake_case
    request keys.
    """
    from pydantic import ValidationError

    from model_insight.reporting.formatters import format_simulation_report
    from model_insight.simulation.scenario import simulate_scenario

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    request = _read_json_or_exit(request_file)
    if not isinstance(request, dict):
        typer.echo("[ERROR] Request must be a JSON object.", err=True)
        raise typer.Exit(code=1)

    input_values = request.get("inputValues", request.get("input_values")) or {}
    dependent_variable = request.get("dependentVariable", request.get("dependent_variable"))
    if not dependent_variable:
        typer.echo("[ERROR] Request is missing 'dependentVariable'.", err=True)
        raise typer.Exit(code=1)

    try:
        result = simulate_scenario(
            input_values,
            request.get("model") or {},
            str(dependent_variable),
            request.get("options"),
            non_negative_targets=config.simulation.non_negative_targets,
            locale=config.formatting.locale,
        )
    except (ValidationError, TypeError, ValueError, AttributeError) as exc:
        typer.echo(f"[ERROR] Simulation failed: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        _echo_json(result.to_payload())
    else:
        typer.echo(
            format_simulation_report(
                result, str(dependent_variable), locale=config.formatting.locale
            )
        )


@app.command("batch")
def batch(
    requests_file: str = typer.Argument(..., help="JSON array of interpret requests."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result payloads."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Interpret several models; each request succeeds or fails on its own."""
    from model_insight.interpretation.service import interpret_batch
    from model_insight.reporting.formatters import format_batch_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    requests = _read_json_or_exit(requests_file)
    if not isinstance(requests, list):
        typer.echo("[ERROR] Batch file must contain a JSON array.", err=True)
        raise typer.Exit(code=1)

    results = interpret_batch(
        requests,
        significance_level=config.interpretation.significance_level,
        r2_threshold=config.interpretation.r2_threshold,
        locale=config.formatting.locale,
    )

    if as_json:
        _echo_json([r.to_payload() for r in results])
    else:
        typer.echo(format_batch_summary(results))


@app.command("format-number")
def format_number_cmd(
    value: str = typer.Argument(..., help="Number to render."),
    type_: Optional[str] = typer.Option(
        None,
        "--type",
        help="auto, fixed, scientific or accounting (default: [formatting] default_type).",
    ),
    digits: Optional[int] = typer.Option(None, "--digits", help="Digits for scientific mode."),
    unit: Optional[str] = typer.Option(None, "--unit", help="Unit suffix."),
    locale: Optional[str] = typer.Option(None, "--locale", help="Locale tag, e.g. pt-BR."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Render one number the way interpretation reports do."""
    from model_insight.reporting.number_format import format_number

    config = _load_config_or_exit(config_path)
    typer.echo(
        format_number(
            value,
            digits=digits,
            type=type_ or config.formatting.default_type,
            unit=unit,
            locale=locale or config.formatting.locale,
        )
    )


if __name__ == "__main__":
    app()
