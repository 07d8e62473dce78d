"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains Protocol, a set of primer combinations
sharing one polymerase and final reaction volume.

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

from mrpcr import config
from mrpcr.mastermix import MasterMix
from mrpcr.polymerase import Polymerase
from mrpcr.program import ThermocyclerProgram, generate_program

logger = logging.getLogger("mrpcr")


class NoCombinationsError(Exception):
    """No valid primer combination to generate programs for."""

    pass


class Protocol:
    """Master mixes and thermocycler programs for a set of primer combinations."""

    def __init__(
        self,
        polymerase,
        primers,
        combinations,
        final_volume=config.FINAL_VOLUME,
        include_optional=True,
    ):
        """Init Protocol."""
        self.polymerase = Polymerase.from_name(polymerase)
        self.primers = {primer.id: primer for primer in primers}
        self.combinations = list(combinations)
        self.final_volume = final_volume
        self.include_optional = include_optional

        for combination in self.dropped_combinations:
            logger.warning(
                f"Dropping combination {combination.id}: primer "
                f"'{combination.forward_id}' or '{combination.reverse_id}' "
                "does not exist"
            )

        logger.debug(str(self))

    def __str__(self):
        lines = [
            "Protocol",
            f"Polymerase: {self.polymerase.display_name}",
            f"Final volume: {self.final_volume} µL",
            "Combinations:",
        ]
        lines.extend(f" - {c}" for c in self.valid_combinations)
        return "\n".join(lines)

    @property
    def valid_combinations(self):
        """Combinations whose primers both exist."""
        return [c for c in self.combinations if c.resolves(self.primers)]

    @property
    def dropped_combinations(self):
        """Combinations referencing a primer that does not exist."""
        return [c for c in self.combinations if not c.resolves(self.primers)]

    @property
    def template_volume(self):
        """Template DNA per reaction."""
        return MasterMix(self.polymerase, self.final_volume).template_volume

    def primer_pair(self, combination):
        """The (forward, reverse) primers for a combination."""
        return self.primers[combination.forward_id], self.primers[combination.reverse_id]

    def combination_name(self, combination):
        forward, reverse = self.primer_pair(combination)
        return f"{forward.name} / {reverse.name}"

    @property
    def master_mixes(self):
        """A list of (combination, MasterMix) tuples."""
        mixes = []
        for combination in self.valid_combinations:
            mix = MasterMix(
                self.polymerase,
                self.final_volume,
                combination.num_reactions,
                include_optional=self.include_optional,
            )
            mixes.append((combination, mix))
        return mixes

    def generate_programs(self):
        """Generate a ThermocyclerProgram for every valid combination."""
        if not self.valid_combinations:
            raise NoCombinationsError("Please define at least one primer combination.")

        programs = []
        for combination in self.valid_combinations:
            forward, reverse = self.primer_pair(combination)
            steps = generate_program(
                self.polymerase, combination.fragment_size, forward, reverse
            )
            programs.append(
                ThermocyclerProgram(
                    combination.id,
                    f"Program for {self.combination_name(combination)}",
                    steps,
                )
            )
        return programs
