"""punycode label decoder"""

from pathlib import Path
from typing import Optional

import typer
from typer import colors

from punydecode.punycode import PunycodeError, find_delimiter, iter_insertions, to_code_units
from punydecode.report import (
    FORMATS,
    decode_label,
    decode_labels,
    describe_failure,
    dump_results,
    read_labels,
)
from punydecode.unicode import code_points_to_text, format_code_point, is_scalar_value

app = typer.Typer(
    name="punydecode",
    help="punycode label decoder",
    add_completion=True,
    no_args_is_help=True,
)


def echo_error(label: str, kind: str, position: int | None, message: str) -> None:
    """Print a decoding failure in red"""
    typer.echo(
        typer.style(f"{label}: {describe_failure(kind, position, message)}", fg=colors.RED)
    )


@app.command("decode")
def decode_command(
    labels: list[str] = typer.Argument(..., help="Punycode label(s) to decode"),
    code_points: bool = typer.Option(
        False,
        "--code-points",
        "-c",
        help="Also print the decoded code points",
    ),
) -> None:
    """Decode one or more punycode labels"""
    failed = 0

    for label in labels:
        result = decode_label(label)
        if not result.ok:
            typer.echo(typer.style(f"{label}: {result.failure}", fg=colors.RED))
            failed += 1
            continue

        typer.echo(f"{typer.style(label, fg=colors.CYAN)} -> {result.text}")
        if code_points:
            typer.echo("  " + " ".join(format_code_point(cp) for cp in result.code_points))

    if failed:
        raise typer.Exit(1)


@app.command()
def explain(
    label: str = typer.Argument(..., help="Punycode label to explain"),
) -> None:
    """Show each insertion made while decoding a label"""
    try:
        units = to_code_units(label)
        delimiter = find_delimiter(units)
        steps = list(iter_insertions(units[delimiter + 1 :], delimiter, delimiter + 1))
    except PunycodeError as e:
        echo_error(label, e.kind, e.position, str(e))
        raise typer.Exit(1) from e

    output = list(units[:delimiter])

    label_style = typer.style("Literal prefix:", fg=colors.CYAN)
    typer.echo(f"{label_style} {bytes(output).decode('ascii')!r}")

    if delimiter == len(units):
        typer.echo(typer.style("No delimiter, nothing to decode.", fg=colors.YELLOW))
    else:
        typer.echo(typer.style("\nInsertions:", fg=colors.GREEN, bold=True))
        for step in steps:
            output.insert(step.position, step.code_point)
            char = chr(step.code_point) if is_scalar_value(step.code_point) else "?"
            typer.echo(
                f"  {typer.style(format_code_point(step.code_point), fg=colors.MAGENTA)} "
                f"{char!r} at {step.position} "
                f"(bias {step.bias}, {step.consumed} digit(s))"
            )

    try:
        text = code_points_to_text(output)
    except ValueError as e:
        echo_error(label, "bad_input", None, str(e))
        raise typer.Exit(1) from e

    label_style = typer.style("\nResult:", fg=colors.CYAN)
    typer.echo(f"{label_style} {text}")


@app.command()
def decode_file(
    path: Path = typer.Argument(..., help="File with one punycode label per line"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results to this JSON or YAML file",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format ({', '.join(FORMATS)}). Defaults to the output file suffix.",
    ),
    progress: bool = typer.Option(
        True,
        help="Show a progress bar",
    ),
) -> None:
    """Decode every label in a file"""
    if not path.exists():
        typer.echo(typer.style(f"Labels file not found: {path}", fg=colors.RED))
        raise typer.Exit(1)

    if fmt is not None and fmt not in FORMATS:
        typer.echo(
            typer.style(
                f"Invalid format '{fmt}'. Valid formats: {', '.join(FORMATS)}",
                fg=colors.RED,
            )
        )
        raise typer.Exit(1)

    labels = read_labels(path)
    if not labels:
        typer.echo(typer.style("No labels found.", fg=colors.YELLOW))
        return

    typer.echo(
        f"Decoding {typer.style(str(len(labels)), fg=colors.CYAN, bold=True)} labels..."
    )
    results = decode_labels(labels, progress=progress)

    if output:
        dump_results(results, output, fmt)
        typer.echo(f"Results saved to {output}")
    else:
        for result in results:
            if result.ok:
                typer.echo(f"{typer.style(result.label, fg=colors.CYAN)} -> {result.text}")

    decoded_count = sum(1 for r in results if r.ok)
    typer.echo(
        f"\nDecoded {typer.style(str(decoded_count), fg=colors.GREEN, bold=True)} labels "
        f"(failed {len(results) - decoded_count})"
    )


if __name__ == "__main__":
    app()
