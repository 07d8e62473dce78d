"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains functions for building thermocycler programs.

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

import logging
import math

from collections import namedtuple

from mrpcr import config
from mrpcr.polymerase import Polymerase
from mrpcr.primer import calc_tm

logger = logging.getLogger("mrpcr")

ThermocyclerStep = namedtuple("ThermocyclerStep", "step temperature duration")
ThermocyclerProgram = namedtuple("ThermocyclerProgram", "combination_id name steps")


class MissingPrimerDetailError(Exception):
    """A primer needed for the program has no sequence."""

    def __init__(self, role, name=""):
        self.role = role
        self.name = name
        super().__init__(
            f"Incomplete primer details: the {role} primer '{name}' has no "
            "sequence. Please provide sequences for all primers."
        )


def calc_annealing_temp(polymerase, tm_fwd, tm_rev):
    """Annealing temperature from the lower primer Tm."""
    profile = Polymerase.from_name(polymerase).profile
    return min(tm_fwd, tm_rev) + profile.annealing_offset


def calc_extension_time(polymerase, fragment_size):
    """Extension time in seconds for a fragment size in bp."""
    profile = Polymerase.from_name(polymerase).profile
    fragment_size_kb = fragment_size / 1000
    return max(
        config.MIN_EXTENSION_SECONDS,
        math.ceil(fragment_size_kb * profile.extension_rate),
    )


def format_duration(seconds, short=True):
    """Format seconds as '30s' / '30 sec', or rounded up minutes as '2m' / '2 min'."""
    if seconds < 60:
        return f"{seconds}s" if short else f"{seconds} sec"
    minutes = math.ceil(seconds / 60)
    return f"{minutes}m" if short else f"{minutes} min"


def format_temp(temp, decimals=None):
    """Format a temperature in degrees C."""
    if decimals is None:
        return f"{temp}°C"
    return f"{temp:.{decimals}f}°C"


def generate_program(polymerase, fragment_size, forward_primer, reverse_primer):
    """
    Build the 4-step thermocycler program for a primer pair.
    Primers need `name` and `seq` attributes.
    Raises MissingPrimerDetailError if either primer has no sequence.
    """
    polymerase = Polymerase.from_name(polymerase)
    profile = polymerase.profile

    for role, primer in (("forward", forward_primer), ("reverse", reverse_primer)):
        if not primer.seq:
            raise MissingPrimerDetailError(role, primer.name)

    tm_fwd = calc_tm(forward_primer.seq)
    tm_rev = calc_tm(reverse_primer.seq)
    annealing_temp = calc_annealing_temp(polymerase, tm_fwd, tm_rev)
    extension_time = calc_extension_time(polymerase, fragment_size)

    logger.debug(
        f"{polymerase}: Tm {tm_fwd:.2f} / {tm_rev:.2f}, annealing "
        f"{annealing_temp:.2f}, extension {extension_time}s for {fragment_size} bp"
    )

    denaturation = format_temp(profile.denaturation_temp)
    cycle_temps = [
        denaturation,
        format_temp(annealing_temp, config.ANNEALING_DECIMALS),
        format_temp(config.EXTENSION_TEMP),
    ]
    cycle_durations = [
        config.CYCLE_DURATIONS.denaturation,
        config.CYCLE_DURATIONS.annealing,
        format_duration(extension_time),
    ]

    return [
        ThermocyclerStep(
            "Initial Denaturation", denaturation, config.INITIAL_DENATURATION_DURATION
        ),
        ThermocyclerStep(
            f"Cycling ({config.CYCLE_LABEL})",
            " → ".join(cycle_temps),
            " → ".join(cycle_durations),
        ),
        ThermocyclerStep(
            "Final Extension",
            format_temp(config.EXTENSION_TEMP),
            profile.final_extension,
        ),
        ThermocyclerStep("Hold", config.HOLD_TEMP, config.HOLD_DURATION),
    ]
