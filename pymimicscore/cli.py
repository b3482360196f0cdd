import json
import logging
import os
import sys
import warnings
from pathlib import Path

import lazy_loader as lazy
import rich_click as click
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TimeElapsedColumn
from rich.traceback import install as rich_traceback_handler

from pymimicscore import __version__
from pymimicscore.analysis.constants import MAX_RECORDING_SECONDS, SPECTRUM_MODES, SPECTRUM_SYNTHETIC
from pymimicscore.audio import load_waveform
from pymimicscore.console import _COMMAND_GROUPS, _OPTION_GROUPS, print_header, print_result, print_status, rich_console
from pymimicscore.core import TurnContext

soundfile = lazy.load("soundfile")

# CLI --help styling
click.rich_click.OPTION_GROUPS = _OPTION_GROUPS
click.rich_click.COMMAND_GROUPS = _COMMAND_GROUPS
click.rich_click.USE_RICH_MARKUP = True
# End CLI styling


@click.group("pymimicscore")
@click.option("--debug", "-d", is_flag=True, default=False, help="Enables debugging mode.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enables verbose logging output (per-descriptor scoring breakdown and timings).")
@click.version_option(__version__, prog_name="pymimicscore", message="%(prog)s %(version)s")
def cli_main(debug, verbose):
    """Score how closely a mimicked recording matches the original performance."""
    # Store flags in environ instead of passing them as parameters
    if debug:
        os.environ["PMS_DEBUG"] = "1"
        warnings.simplefilter("default")
        rich_traceback_handler(console=rich_console, suppress=[click])
    else:
        warnings.filterwarnings("ignore")

    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.ERROR

    logging.basicConfig(
        format="%(message)s",
        level=level,
        force=True,
        handlers=[RichHandler(level=level, console=rich_console, rich_tracebacks=debug, show_path=debug, show_time=False, tracebacks_suppress=[click])],
    )


@cli_main.command()
@click.option("--reference", "-r", type=click.Path(exists=True, dir_okay=False), required=True, help="Path to the original (forward) performance.")
@click.option("--candidate", "-c", type=click.Path(exists=True, dir_okay=False), required=True, help="Path to the imitation.")
@click.option("--reverse-candidate", is_flag=True, default=False, help="The candidate is the raw imitation of the reversed reference; reverse it back to forward orientation before scoring.")
@click.option("--max-duration", type=click.FloatRange(min=0, min_open=True), default=MAX_RECORDING_SECONDS, show_default=True, help="Only the first N seconds of each recording are scored.")
@click.option("--spectrum", type=click.Choice(SPECTRUM_MODES, case_sensitive=False), default=SPECTRUM_SYNTHETIC, show_default=True, help=r"Magnitude source for the timbre and brightness descriptors. [dim yellow](fft changes scores; synthetic is the reference behaviour)[/]")
@click.option("--parallel", is_flag=True, default=False, help="Analyze both recordings on separate threads.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the score breakdown as JSON instead of a table.")
@click.option("--no-breakdown", is_flag=True, default=False, help="Only print the final score.")
def compare(reference, candidate, reverse_candidate, max_duration, spectrum, parallel, as_json, no_breakdown):
    """Compare a candidate recording against a reference and print a 0-100 similarity score."""
    try:
        with Progress(
            SpinnerColumn(),
            *Progress.get_default_columns(),
            TimeElapsedColumn(),
            console=rich_console,
            transient=True,
            disable=as_json,
        ) as progress:
            progress.add_task("Scoring", total=None)
            ctx = TurnContext().with_reference(load_waveform(reference, max_duration=max_duration))
            attempt = load_waveform(candidate, max_duration=max_duration)
            if reverse_candidate:
                ctx = ctx.with_attempt(attempt).reverse_attempt()
            else:
                ctx = ctx.with_attempt_forward(attempt)
            breakdown = ctx.breakdown(spectrum=spectrum.lower(), parallel=parallel)
    except Exception as e:
        print_exception(e)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(breakdown.to_dict(), indent=2))
        return

    if not no_breakdown:
        print_header(
            "Mimicry score",
            f"{Path(reference).name} vs {Path(candidate).name}"
            + (" (reversed to forward)" if reverse_candidate else ""),
        )
    print_result(breakdown, show_breakdown=not no_breakdown)


@cli_main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", "-o", type=click.Path(exists=False, writable=True, file_okay=False), default=None, help="The output directory to use for the reversed file. Default: next to the input file.")
@click.option("--format", "fmt", type=click.Choice(("WAV", "FLAC", "OGG"), case_sensitive=False), default="WAV", show_default=True, help="Audio format of the reversed file.")
def reverse(path, output_dir, fmt):
    """Write a time-reversed copy of a recording, as heard by the mimicking player."""
    try:
        ctx = TurnContext().with_reference(load_waveform(path, max_duration=None)).reverse_reference()

        out_dir = Path(output_dir).resolve() if output_dir is not None else Path(path).resolve().parent
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / f"{Path(path).stem}-reversed.{fmt.lower()}"

        soundfile.write(
            str(out_path),
            ctx.reference_reversed.samples,
            ctx.reference_reversed.sample_rate,
            format=fmt.upper(),
        )
    except Exception as e:
        print_exception(e)
        sys.exit(1)

    print_status(f"Reversed audio written to [green]{out_path}[/]", "success")


def print_exception(e: Exception):
    if "PMS_DEBUG" in os.environ:
        rich_console.print_exception(suppress=[click])
    else:
        logging.error(e)


if __name__ == "__main__":
    cli_main()
