from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from tqdm import tqdm

from moltraj.config import load_settings
from moltraj.core.errors import FormatError, MoltrajError
from moltraj.core.logging_utils import get_logger
from moltraj.formats.registry import format_for
from moltraj.model.cell import UnitCell
from moltraj.trajectory import Trajectory

logger = get_logger(__name__)
app = typer.Typer(no_args_is_help=True)


def _resolve_format(path: Path, fmt: Optional[str]) -> Optional[str]:
    """Explicit format, else the extension's, else MOLTRAJ_DEFAULT_FORMAT."""
    if fmt:
        return fmt
    try:
        format_for(path)
        return None
    except FormatError:
        default = load_settings().default_format
        if not default:
            raise
        logger.info("No format registered for %s, using default format %s", path, default)
        return default


def _open(path: Path, fmt: Optional[str], mode: str = "r") -> Trajectory:
    return Trajectory(path, mode, _resolve_format(path, fmt))


def _parse_cell(text: str) -> UnitCell:
    try:
        values = [float(v) for v in text.split(",")]
    except ValueError:
        raise typer.BadParameter(f"Could not parse cell '{text}'") from None
    if len(values) not in (3, 6):
        raise typer.BadParameter("Cell needs 3 lengths, or 3 lengths and 3 angles")
    try:
        return UnitCell(*values)
    except MoltrajError as e:
        raise typer.BadParameter(str(e)) from e


def _fail(error: MoltrajError) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


@app.command("info")
def info(
    path: Path = typer.Argument(..., help="Trajectory file."),
    fmt: Optional[str] = typer.Option(None, "--format", help="Format name (default: from extension)."),
):
    """Describe a trajectory: format, step count and first step content."""
    try:
        with _open(path, fmt) as traj:
            nsteps = traj.nsteps
            typer.echo(f"{path}: {traj.format.description()}")
            typer.echo(f"steps: {nsteps}")
            if nsteps == 0:
                return
            frame = traj.read()
    except MoltrajError as e:
        raise _fail(e)

    topology = frame.topology
    cell = frame.cell
    typer.echo(f"atoms: {frame.natoms}")
    typer.echo(f"bonds: {len(topology.bonds)}")
    typer.echo(f"residues: {len(topology.residues)}")
    if cell.is_infinite:
        typer.echo("cell: none")
    else:
        typer.echo(
            f"cell: {cell.a:.3f} {cell.b:.3f} {cell.c:.3f} "
            f"{cell.alpha:.2f} {cell.beta:.2f} {cell.gamma:.2f} ({cell.shape.value})"
        )


@app.command("atoms")
def atoms(
    path: Path = typer.Argument(..., help="Trajectory file."),
    step: int = typer.Option(0, help="Step to show."),
    fmt: Optional[str] = typer.Option(None, "--format", help="Format name (default: from extension)."),
    csv: Optional[Path] = typer.Option(None, help="Write the atom table to this CSV file."),
):
    """Print the atom table of one step."""
    try:
        with _open(path, fmt) as traj:
            frame = traj.read_step(step)
    except MoltrajError as e:
        raise _fail(e)

    df = frame.to_dataframe()
    if csv is not None:
        csv.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(csv, index=False)
        logger.info("Wrote %d atoms to %s", len(df), csv)
    else:
        typer.echo(df.to_string(index=False))


@app.command("convert")
def convert(
    input: Path = typer.Argument(..., help="Trajectory to read."),
    output: Path = typer.Argument(..., help="Trajectory to write (truncated)."),
    input_format: Optional[str] = typer.Option(None, help="Input format name."),
    output_format: Optional[str] = typer.Option(None, help="Output format name."),
    topology: Optional[Path] = typer.Option(None, help="Take the topology from this file's first step."),
    cell: Optional[str] = typer.Option(None, help="Unit cell 'a,b,c' or 'a,b,c,alpha,beta,gamma'."),
):
    """Copy every step of INPUT into OUTPUT, converting between formats."""
    unit_cell = _parse_cell(cell) if cell else None
    try:
        with _open(input, input_format) as src, _open(output, output_format, "w") as dst:
            if topology is not None:
                src.set_topology(topology)
            if unit_cell is not None:
                src.set_cell(unit_cell)
            for _ in tqdm(range(src.nsteps), desc="convert", unit="step"):
                dst.write(src.read())
            written = dst.nsteps
    except MoltrajError as e:
        raise _fail(e)
    logger.info("Converted %d steps from %s to %s", written, input, output)
    typer.echo(f"wrote {written} steps to {output}")
