"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains the CLI for Mr. PCR.
It is executed when the user runs 'mrpcr' after installation,
or 'python -m mrpcr'.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>
"""

import click
import csv
import logging
import sys

from pathlib import Path

from Bio import SeqIO

from mrpcr import __version__ as version, config
from mrpcr.mastermix import MasterMix, format_volume
from mrpcr.polymerase import Polymerase
from mrpcr.primer import Primer, PrimerCombination, calc_gc, calc_tm, normalize_seq
from mrpcr.program import MissingPrimerDetailError, generate_program
from mrpcr.protocol import NoCombinationsError
from mrpcr.reporting import ProtocolReporter

logger = logging.getLogger("mrpcr")


CLI_CONTEXT = dict(auto_envvar_prefix="MRPCR", help_option_names=["-h", "--help"],)

COMBINATION_COLUMNS = ("forward", "reverse", "fragment_size", "reactions")


def polymerase_option(f):
    return click.option(
        "--polymerase",
        "-p",
        type=click.Choice([p.value for p in Polymerase], case_sensitive=False),
        help="DNA polymerase.",
        default=config.POLYMERASE,
        show_default=True,
    )(f)


def final_volume_option(f):
    return click.option(
        "--final-volume",
        "-v",
        type=click.FloatRange(min=0, min_open=True),
        help="Final volume of each reaction (µL).",
        metavar="<float>",
        default=config.FINAL_VOLUME,
        show_default=True,
    )(f)


def gc_enhancer_option(f):
    return click.option(
        "--gc-enhancer/--no-gc-enhancer",
        "-g",
        help="Include the optional GC enhancer, where the recipe has one.",
        default=True,
        show_default=True,
    )(f)


@click.group(context_settings=CLI_CONTEXT)
@click.version_option(version, "--version", "-V")
def cli():
    """a calculator for PCR master mixes and thermocycler programs."""
    pass


@cli.command()
@click.argument("sequences", nargs=-1, required=True)
def tm(sequences):
    """Estimate primer melting temperatures."""
    rows = [["sequence", "size", "%gc", "tm"]]
    for seq in sequences:
        clean = normalize_seq(seq)
        rows.append(
            [clean, str(len(clean)), f"{calc_gc(clean):.2f}", f"{calc_tm(clean):.2f}"]
        )
    click.echo(format_table(rows))


@cli.command()
@polymerase_option
@final_volume_option
@click.option(
    "--reactions",
    "-r",
    type=click.IntRange(1),
    help="Number of reactions.",
    metavar="<int>",
    default=config.NUM_REACTIONS,
    show_default=True,
)
@gc_enhancer_option
def mix(polymerase, final_volume, reactions, gc_enhancer):
    """Calculate a master mix."""
    master_mix = MasterMix(
        polymerase, final_volume, reactions, include_optional=gc_enhancer
    )
    click.echo(master_mix.summary)
    click.echo(format_mastermix(master_mix))
    click.echo(master_mix.instructions)
    if master_mix.is_degenerate:
        warn_degenerate(master_mix)


@cli.command()
@click.argument("forward")
@click.argument("reverse")
@polymerase_option
@click.option(
    "--fragment-size",
    "-s",
    type=click.IntRange(0),
    help="Expected fragment size (bp).",
    metavar="<int>",
    default=config.FRAGMENT_SIZE,
    show_default=True,
)
def program(forward, reverse, polymerase, fragment_size):
    """Generate a thermocycler program for a primer pair."""
    forward_primer = Primer("forward", name=forward, seq=forward)
    reverse_primer = Primer("reverse", name=reverse, seq=reverse)
    try:
        steps = generate_program(
            polymerase, fragment_size, forward_primer, reverse_primer
        )
    except MissingPrimerDetailError as e:
        click.echo(click.style(f"Error: {e}", fg="red"))
        sys.exit(3)

    click.echo(
        f"Tm forward {forward_primer.tm:.2f}°C, reverse {reverse_primer.tm:.2f}°C"
    )
    rows = [["Step", "Temperature", "Duration"]] + [list(s) for s in steps]
    click.echo(format_table(rows))


@cli.command()
@click.argument("primers", type=click.Path(exists=True, dir_okay=False))
@click.argument("combinations", type=click.Path(exists=True, dir_okay=False))
@polymerase_option
@final_volume_option
@gc_enhancer_option
@click.option(
    "--outpath",
    "-o",
    type=click.Path(file_okay=False, writable=True),
    help="Path to output directory.",
    metavar="<dir>",
    default=config.OUTPUT_PATH,
    show_default=True,
)
@click.option(
    "--name",
    "-n",
    type=click.STRING,
    help="Prefix name for your outputs.",
    metavar="<str>",
    default=config.PREFIX,
    show_default=True,
)
@click.option("--debug/--no-debug", "-d", help="Set log level DEBUG.", default=False)
@click.option(
    "--force/--no-force",
    "-f",
    help="Force output to an existing directory, overwrite files.",
    default=False,
)
def protocol(
    primers,
    combinations,
    polymerase,
    final_volume,
    gc_enhancer,
    outpath,
    name,
    debug,
    force,
):
    """Design a protocol for a set of primer combinations."""
    # Validate output path
    try:
        outpath = get_output_path(outpath, force=force)
    except IOError as e:
        click.echo(click.style(f"Error: {e}", fg="red",))
        sys.exit(1)

    # Setup logging
    setup_logging(outpath, debug=debug, prefix=name)

    # Process inputs
    try:
        primer_list = process_primers(primers)
        combination_list = process_combinations(combinations)
    except ValueError as e:
        logger.error(f"Error: {e}")
        sys.exit(2)

    logger.info(
        "\n".join(["Primers:"] + [f" - {p.id} ({p.tm:.2f}°C)" for p in primer_list])
    )

    # Create protocol
    try:
        reporter = ProtocolReporter(
            outpath,
            polymerase,
            primer_list,
            combination_list,
            final_volume=final_volume,
            include_optional=gc_enhancer,
            prefix=name,
        )
        programs = reporter.programs
    except MissingPrimerDetailError as e:
        logger.error(f"Error: {e}")
        sys.exit(3)
    except NoCombinationsError as e:
        logger.error(f"Error: {e}")
        sys.exit(4)
    except Exception as e:
        # Unexpected error
        logger.error(f"Error: {e}")
        raise e

    for combination_id in reporter.degenerate_combinations:
        logger.warning(
            f"WARNING: {combination_id}: final volume too small for the "
            f"{reporter.polymerase.display_name} recipe."
        )

    # Write outputs
    reporter.write_default_outputs()
    logger.info(
        f"All done! Protocol created with {len(programs)} "
        f"combination{'' if len(programs) == 1 else 's'}, "
        f"{len(reporter.dropped_combinations)} dropped"
    )
    sys.exit(0)


def process_primers(file_path):
    """Parse and validate the primer fasta file."""

    primers = []
    records = SeqIO.parse(file_path, "fasta")  # may raise

    for record in records:
        primers.append(Primer(record.id, name=record.id, seq=str(record.seq)))

    if not primers:
        raise ValueError("The primer FASTA file does not contain any primers.")

    ids = [p.id for p in primers]
    if len(set(ids)) != len(ids):
        raise ValueError("Primer ids in the FASTA file must be unique.")

    return primers


def process_combinations(file_path):
    """Parse and validate the primer combinations TSV file."""

    combinations = []
    with open(file_path, newline="") as fh:
        reader = csv.DictReader(fh, delimiter="\t")
        missing = [c for c in COMBINATION_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(
                "The combinations file is missing required columns: "
                f"{', '.join(missing)}."
            )

        for i, row in enumerate(reader, start=1):
            try:
                fragment_size = int(row["fragment_size"])
                num_reactions = int(row["reactions"])
            except (TypeError, ValueError):
                raise ValueError(
                    f"Combination {i} has an invalid fragment size or reaction count."
                )
            if fragment_size < 0 or num_reactions < 1:
                raise ValueError(
                    f"Combination {i} needs a fragment size >= 0 and at least "
                    "one reaction."
                )
            combinations.append(
                PrimerCombination(
                    row.get("name") or f"combination_{i}",
                    (row["forward"] or "").strip(),
                    (row["reverse"] or "").strip(),
                    fragment_size=fragment_size,
                    num_reactions=num_reactions,
                )
            )

    if not combinations:
        raise ValueError("The combinations file does not contain any combinations.")

    ids = [c.id for c in combinations]
    if len(set(ids)) != len(ids):
        raise ValueError(
            "Combination names in the combinations file must be unique."
        )

    return combinations


def format_table(rows):
    """Format rows of strings as a plain text table."""
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    lines = []
    for n, row in enumerate(rows):
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
        if n == 0:
            lines.append("  ".join("-" * w for w in widths))
    return "\n".join(lines)


def format_mastermix(master_mix):
    """Format a master mix as a plain text table."""
    rows = [["Component", "Stock", "Final", "Volume (µL)"]]
    for r in master_mix.reagents:
        rows.append(
            [r.name, r.stock_conc or "", r.final_conc, format_volume(r.total_volume)]
        )
    return format_table(rows)


def warn_degenerate(master_mix):
    click.echo(
        click.style(
            f"WARNING: {master_mix.final_volume:g} µL is too small for the "
            f"{master_mix.polymerase.display_name} recipe "
            f"(water {format_volume(master_mix.water_volume)} µL per reaction).",
            fg="red",
        )
    )


def setup_logging(output_path, debug=False, prefix="mrpcr"):
    """Setup logging output and verbosity."""

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Drop handlers from a previous run
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    # File handler
    log_filepath = output_path / f"{prefix}.log"
    fh = logging.FileHandler(log_filepath)
    fh.setLevel(logging.DEBUG)
    fh_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    fh.setFormatter(fh_formatter)
    logger.addHandler(fh)

    # Stream handler STDOUT
    sh = logging.StreamHandler(sys.stdout)
    sh.setLevel(logging.INFO)
    sh_formatter = logging.Formatter("%(message)s")
    sh.setFormatter(sh_formatter)
    logger.addHandler(sh)

    logger.info(f"Writing log to {log_filepath}")
    logger.debug(f"mrpcr version {version}")


def get_output_path(output_path, force=False):
    """
    Check for an existing output dir, require --force to overwrite.
    Create dir, return path object.
    """
    path = Path(output_path)

    if path.exists() and not force:
        raise IOError("Directory exists add --force to overwrite")

    path.mkdir(exist_ok=True)
    return path


def main():
    cli()


if __name__ == "__main__":
    cli()
