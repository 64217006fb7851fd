# -*- coding: utf-8 -*-
"""
boilersim CLI
=============

Terminal front end for the boiler simulator.

    boilersim simulate [OPTIONS]     Run one simulation
    boilersim batch FILE             Run every scenario in a file
    boilersim defaults               Show default scenario and parameters
"""

import json
import logging
import math
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from boilersim._version import __version__
from boilersim.batch import BatchSimulator
from boilersim.config import get_config
from boilersim.dashboard import ActivityLog, summarize
from boilersim.exceptions import BoilerSimException
from boilersim.models import Air, ControlSettings, Fuel, Water
from boilersim.params import DEFAULT_PARAMS, load_params
from boilersim.scenarios import DEFAULT_SCENARIO, Scenario, load_scenario, load_scenarios
from boilersim.simulator import BoilerSimulator

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="boilersim",
    help="boilersim: steady-state fire-tube boiler simulator",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, get_config().log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _fail(error: BoilerSimException) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    raise typer.Exit(1)


def json_safe(value: Any) -> Any:
    """Replace non-finite floats with "inf", "-inf" or "nan" strings."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


def _echo_json(data: Dict[str, Any]) -> None:
    typer.echo(json.dumps(json_safe(data), indent=2, default=str, allow_nan=False))


@app.callback(invoke_without_command=True)
def _root(
    version: bool = typer.Option(False, "--version", help="Show version and exit")
):
    """
    boilersim - steady-state fire-tube boiler simulator
    """
    if version:
        console.print(f"boilersim v{__version__}")
        raise typer.Exit(0)
    _configure_logging()


def _build_scenario(
    scenario_file: Optional[Path],
    params_file: Optional[Path],
    overrides: Dict[str, Optional[float]],
    fuel_type: Optional[str],
) -> Scenario:
    base = load_scenario(scenario_file) if scenario_file else DEFAULT_SCENARIO

    def pick(key: str, default: float) -> float:
        value = overrides.get(key)
        return default if value is None else value

    params = load_params(params_file, base=base.params) if params_file else base.params

    return Scenario(
        name=base.name,
        fuel=Fuel(
            type=fuel_type or base.fuel.type,
            quantity=pick("fuel_quantity", base.fuel.quantity),
            heat_content=pick("heat_content", base.fuel.heat_content),
        ),
        water=Water(
            quantity=pick("water_quantity", base.water.quantity),
            temperature=pick("water_temp", base.water.temperature),
        ),
        air=Air(
            quantity=pick("air_quantity", base.air.quantity),
            temperature=pick("air_temp", base.air.temperature),
        ),
        electricity=pick("electricity", base.electricity),
        control_settings=ControlSettings(
            pressure=pick("pressure", base.control_settings.pressure),
            temperature=pick("temperature", base.control_settings.temperature),
        ),
        params=params,
    )


@app.command()
def simulate(
    fuel_type: Optional[str] = typer.Option(None, "--fuel-type", help="Fuel name (default: wood)"),
    fuel_quantity: Optional[float] = typer.Option(None, "--fuel-quantity", help="Fuel rate, lb/hr"),
    heat_content: Optional[float] = typer.Option(None, "--heat-content", help="Heat content, BTU/lb"),
    water_quantity: Optional[float] = typer.Option(None, "--water-quantity", help="Feedwater, lb/hr"),
    water_temp: Optional[float] = typer.Option(None, "--water-temp", help="Feedwater temperature, °C"),
    air_quantity: Optional[float] = typer.Option(None, "--air-quantity", help="Combustion air, ft³/hr"),
    air_temp: Optional[float] = typer.Option(None, "--air-temp", help="Air temperature, °C"),
    electricity: Optional[float] = typer.Option(None, "--electricity", help="Electricity, kW"),
    pressure: Optional[float] = typer.Option(None, "--pressure", help="Target pressure, PSIG"),
    temperature: Optional[float] = typer.Option(None, "--temperature", help="Target temperature, °F"),
    scenario_file: Optional[Path] = typer.Option(None, "--scenario", help="Scenario file (YAML/JSON)"),
    params_file: Optional[Path] = typer.Option(None, "--params", help="Boiler parameter file (YAML/JSON)"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--permissive", help="Reject degenerate operating points"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", help="Output format (JSON writes inf/nan as strings)"
    ),
    provenance: Optional[bool] = typer.Option(
        None, "--provenance/--no-provenance", help="Include the provenance record"
    ),
):
    """Run one simulation"""
    if provenance is None:
        provenance = get_config().enable_provenance

    try:
        scenario = _build_scenario(
            scenario_file,
            params_file,
            {
                "fuel_quantity": fuel_quantity,
                "heat_content": heat_content,
                "water_quantity": water_quantity,
                "water_temp": water_temp,
                "air_quantity": air_quantity,
                "air_temp": air_temp,
                "electricity": electricity,
                "pressure": pressure,
                "temperature": temperature,
            },
            fuel_type,
        )
        simulator = BoilerSimulator(strict=strict)
        record = None
        if provenance:
            output, record = simulator.simulate_with_provenance(
                scenario.fuel,
                scenario.water,
                scenario.air,
                scenario.electricity,
                scenario.control_settings,
                scenario.params,
            )
        else:
            output = simulator.run_scenario(scenario)
    except BoilerSimException as e:
        _fail(e)

    summary = summarize(output)

    if output_format == OutputFormat.json:
        data = {
            "scenario": scenario.name,
            "output": output.to_dict(),
            "dashboard": summary.to_dict(),
        }
        if record:
            data["provenance"] = record.to_audit_record()
        _echo_json(data)
        return

    table = Table(title=f"Simulation: {scenario.name}", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    for card in summary.stat_cards:
        table.add_row(card.title, card.value)
    table.add_row("Waste Heat", f"{output.waste_heat:,.0f} BTU/hr")
    table.add_row("Flue Gas Volume", f"{output.flue_gases.volume:,.0f} ft³/hr")
    table.add_row("Flue Gas Temperature", f"{output.flue_gases.temp:g} °C")
    for species, percent in summary.flue_gas_composition:
        table.add_row(f"Flue Gas {species}", f"{percent:g}%")
    for species, quantity in summary.emissions:
        table.add_row(f"Emissions {species}", f"{quantity:g}")
    console.print(table)

    if record:
        console.print(f"[blue]Provenance:[/blue] {record.provenance_hash}")


@app.command()
def batch(
    scenario_file: Path = typer.Argument(..., help="Scenario file with a 'scenarios:' list"),
    max_workers: Optional[int] = typer.Option(None, "--max-workers", help="Parallel workers"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--permissive", help="Reject degenerate operating points"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", help="Output format (JSON writes inf/nan as strings)"
    ),
):
    """Run every scenario in a file"""
    try:
        scenarios = load_scenarios(scenario_file)
    except BoilerSimException as e:
        _fail(e)

    runner = BatchSimulator(BoilerSimulator(strict=strict), max_workers=max_workers)
    result = runner.run(scenarios)

    if output_format == OutputFormat.json:
        _echo_json(result.to_dict())
    else:
        table = Table(title="Batch Simulation", show_header=True, header_style="bold magenta")
        table.add_column("Scenario", style="cyan")
        table.add_column("Steam Flow (PPH)", justify="right", style="green")
        table.add_column("Waste Heat (BTU/hr)", justify="right")
        table.add_column("Status")
        for outcome in result.outcomes:
            if outcome.succeeded:
                table.add_row(
                    outcome.scenario.name,
                    f"{outcome.output.steam.flow_rate:,.2f}",
                    f"{outcome.output.waste_heat:,.0f}",
                    "[green]OK[/green]",
                )
            else:
                table.add_row(outcome.scenario.name, "-", "-", "[red]FAILED[/red]")
        console.print(table)

        activity = ActivityLog()
        for outcome in result.outcomes:
            if outcome.succeeded:
                activity.record_run(outcome.scenario)
        console.print("\n[bold]Recent Activity[/bold]")
        for entry in activity.entries():
            console.print(f"  {escape(entry)}")

        console.print(
            f"\n{result.successful_count} succeeded, {result.failed_count} failed "
            f"in {result.batch_duration_seconds:.3f}s"
        )

    if result.failed_count:
        raise typer.Exit(1)


@app.command()
def defaults(
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", help="Output format (JSON writes inf/nan as strings)"
    ),
):
    """Show the default scenario and boiler parameters"""
    if output_format == OutputFormat.json:
        _echo_json({
            "scenario": DEFAULT_SCENARIO.to_dict(),
            "params": DEFAULT_PARAMS.model_dump(),
        })
        return

    table = Table(title="Default Scenario", show_header=True, header_style="bold magenta")
    table.add_column("Input", style="cyan")
    table.add_column("Value", style="green")
    scenario = DEFAULT_SCENARIO.to_dict()
    for key in ("fuel", "water", "air", "control_settings"):
        for field_name, value in scenario[key].items():
            table.add_row(f"{key}.{field_name}", str(value))
    table.add_row("electricity", str(scenario["electricity"]))
    console.print(table)

    table = Table(title="Default Boiler Parameters", show_header=True, header_style="bold magenta")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")
    for key, value in DEFAULT_PARAMS.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


def main():
    """Main entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    main()
