"""
Tests for command line interface (CLI)
"""

import pytest
import re
import subprocess
import sys

from mrpcr.cli import cli, process_combinations, process_primers


def test_runas_module():
    """Can this package be run as a Python module?"""
    result = subprocess.run([sys.executable, "-m", "mrpcr", "--help"])

    assert result.returncode == 0


@pytest.mark.parametrize("command", ["tm", "mix", "program", "protocol"])
def test_commands_available(command, cli_runner):
    """Are all commands available, with help?"""
    result = cli_runner.invoke(cli, [command, "-h"])

    assert result.exit_code == 0


def test_cli_without_command_shows_help(cli_runner):
    """Does CLI display help when run w/o a command argument?"""
    result = cli_runner.invoke(cli)

    assert "--help" in result.output


@pytest.mark.parametrize(
    "option", ["-V", "--version"],
)
def test_cli_version_output(option, cli_runner):
    """Does CLI output a sensible version number for -V and --version?"""
    result = cli_runner.invoke(cli, option)

    assert re.match(
        r"^cli, version \d{1,2}.\d{1,2}.\d{1,2}[a-zA-Z]{0,3}\d*$", result.output,
    )


def test_tm_command(cli_runner):
    """Does tm print the Tm of each sequence?"""
    result = cli_runner.invoke(cli, ["tm", "atgc", "AGAGTTTGATCCTGGCTCAG"])

    assert result.exit_code == 0
    assert "12.00" in result.output
    assert "51.78" in result.output


def test_mix_command_defaults(cli_runner):
    """Does mix print the Taq recipe for 8 x 25 uL by default?"""
    result = cli_runner.invoke(cli, ["mix"])

    assert result.exit_code == 0
    assert "8 reactions" in result.output
    assert "158.40" in result.output
    assert "Add 1.00 µL of template DNA" in result.output
    assert "warning" not in result.output.lower()


def test_mix_command_warns_when_degenerate(cli_runner, degenerate_taq):
    """Does mix warn when the water term goes negative?"""
    result = cli_runner.invoke(cli, ["mix", "-p", "Taq"])

    assert result.exit_code == 0
    assert "WARNING: 25 µL is too small" in result.output
    assert "water -9.50 µL per reaction" in result.output
    assert "Nuclease-free water" not in result.output


def test_mix_command_polymerase_case_insensitive(cli_runner):
    """Does mix accept lowercase polymerase names?"""
    result = cli_runner.invoke(cli, ["mix", "-p", "phusion", "-v", "50", "-r", "2"])

    assert result.exit_code == 0
    assert "Phusion GC Enhancer" in result.output


def test_mix_command_no_gc_enhancer(cli_runner):
    """Does --no-gc-enhancer leave the GC enhancer out?"""
    result = cli_runner.invoke(cli, ["mix", "-p", "Q5", "--no-gc-enhancer"])

    assert result.exit_code == 0
    assert "GC Enhancer" not in result.output


@pytest.mark.parametrize("args", [["-r", "0"], ["-v", "0"], ["-p", "Pfu"]])
def test_mix_command_rejects_bad_values(args, cli_runner):
    """Does mix reject invalid option values with exit code 2?"""
    result = cli_runner.invoke(cli, ["mix"] + args)

    assert result.exit_code == 2


def test_mix_reads_environment(cli_runner):
    """Are option defaults read from MRPCR_ environment variables?"""
    result = cli_runner.invoke(cli, ["mix"], env={"MRPCR_MIX_REACTIONS": "3"})

    assert result.exit_code == 0
    assert "3 reactions" in result.output


def test_program_command(cli_runner):
    """Does program print the 4-step program?"""
    args = ["program", "GGGGCCCCAAAA", "GGGGGCCCCCAAA", "-p", "Taq", "-s", "500"]
    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 0
    assert "95°C → 35.0°C → 72°C" in result.output
    assert "10s → 20s → 30s" in result.output
    assert "5-10 minutes" in result.output


def test_program_command_missing_sequence(cli_runner):
    """Does program exit with code 3 when a primer has no valid bases?"""
    result = cli_runner.invoke(cli, ["program", "GGGGCCCCAAAA", "NNNN"])

    assert result.exit_code == 3
    assert "reverse primer 'NNNN'" in result.output


def test_process_primers(primers_fasta):
    """Does process_primers return normalized primers keyed by record id?"""
    primers = process_primers(primers_fasta)
    assert [p.id for p in primers] == ["27F", "1492R", "short_F", "short_R"]
    assert primers[0].seq == "AGAGTTTGATCCTGGCTCAG"


def test_process_primers_empty_input(primers_fasta_empty):
    """Does process_primers raise for empty input?"""
    with pytest.raises(ValueError, match="does not contain any primers"):
        process_primers(primers_fasta_empty)


def test_process_combinations(combinations_tsv):
    """Does process_combinations parse every row?"""
    combinations = process_combinations(combinations_tsv)
    assert [c.id for c in combinations] == ["16S", "short", "dangling"]
    assert combinations[0].fragment_size == 1465
    assert combinations[1].num_reactions == 4


def test_process_combinations_default_ids(combinations_tsv_blank_primer):
    """Are combinations without a name numbered?"""
    combinations = process_combinations(combinations_tsv_blank_primer)
    assert combinations[0].id == "combination_1"


def test_process_combinations_missing_columns(combinations_tsv_bad_columns):
    """Does process_combinations raise for missing columns?"""
    with pytest.raises(ValueError, match="missing required columns"):
        process_combinations(combinations_tsv_bad_columns)


def test_process_combinations_invalid_numbers(tmp_path):
    """Does process_combinations raise for invalid numbers?"""
    fh = tmp_path / "bad_numbers.tsv"
    fh.write_text("forward\treverse\tfragment_size\treactions\na\tb\tlots\t2\n")
    with pytest.raises(ValueError, match="invalid fragment size"):
        process_combinations(fh)


def test_process_combinations_same_primer(tmp_path):
    """Does process_combinations raise when forward and reverse are the same?"""
    fh = tmp_path / "same_primer.tsv"
    fh.write_text("forward\treverse\tfragment_size\treactions\na\ta\t500\t2\n")
    with pytest.raises(ValueError, match="both forward and reverse"):
        process_combinations(fh)


def test_process_combinations_duplicate_names(combinations_tsv_duplicate_names):
    """Does process_combinations raise when two combinations share a name?"""
    with pytest.raises(ValueError, match="must be unique"):
        process_combinations(combinations_tsv_duplicate_names)
