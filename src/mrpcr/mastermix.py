"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains MasterMix, which scales a polymerase recipe
to a final reaction volume and a batch of reactions.

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

from collections import namedtuple

from mrpcr import config
from mrpcr.polymerase import BULK_EXCLUDED_ROLES, OPTIONAL_ROLES, Polymerase

logger = logging.getLogger("mrpcr")


ScaledReagent = namedtuple(
    "ScaledReagent", "role name stock_conc final_conc volume total_volume"
)


class MasterMix:
    """A master mix for a batch of reactions."""

    def __init__(
        self,
        polymerase,
        final_volume=config.FINAL_VOLUME,
        num_reactions=config.NUM_REACTIONS,
        include_optional=True,
    ):
        """Init MasterMix."""
        self.polymerase = Polymerase.from_name(polymerase)
        self.final_volume = final_volume
        self.num_reactions = num_reactions
        self.include_optional = include_optional

        logger.debug(str(self))

    def __str__(self):
        lines = [
            "MasterMix",
            f"Polymerase: {self.polymerase.display_name}",
            f"Final volume: {self.final_volume} µL",
            f"Reactions: {self.num_reactions}",
            f"Water per reaction: {self.water_volume} µL",
        ]
        return "\n".join(lines)

    @property
    def recipe(self):
        """The polymerase recipe at the reference scale."""
        return self.polymerase.recipe

    @property
    def scale_factor(self):
        """Final volume relative to the 25 uL reference recipe."""
        return self.final_volume / config.REFERENCE_VOLUME

    @property
    def batch_factor(self):
        """Reaction count plus pipetting overage."""
        return self.num_reactions * config.OVERAGE_FACTOR

    @property
    def template_volume(self):
        """Template DNA per reaction, added to each tube rather than the mix."""
        return self.recipe.template_dna.volume * self.scale_factor

    @property
    def components(self):
        """Scaled (role, reagent, volume per reaction) for the bulk components."""
        components = []
        for role, reagent in self.recipe._asdict().items():
            if reagent is None or role in BULK_EXCLUDED_ROLES:
                continue
            if role in OPTIONAL_ROLES and not self.include_optional:
                continue
            components.append((role, reagent, reagent.volume * self.scale_factor))
        return components

    @property
    def water_volume(self):
        """
        Water per reaction, the balancing term.
        Not clamped: negative when the components exceed the final volume.
        """
        component_volume = sum(volume for _, _, volume in self.components)
        return self.final_volume - component_volume - self.template_volume

    @property
    def is_degenerate(self):
        """Is the final volume too small for the scaled components?"""
        return self.water_volume <= 0

    @property
    def reagents(self):
        """Scaled reagents with a positive total volume, water last."""
        per_reaction = self.components + [
            ("water", self.recipe.water, self.water_volume)
        ]
        reagents = []
        for role, reagent, volume in per_reaction:
            total_volume = volume * self.batch_factor
            if total_volume <= 0:
                logger.debug(f"Omitting {reagent.name} (total {total_volume} µL)")
                continue
            reagents.append(
                ScaledReagent(
                    role,
                    reagent.name,
                    reagent.stock_conc,
                    reagent.final_conc,
                    volume,
                    total_volume,
                )
            )
        return reagents

    @property
    def total_volume(self):
        """Total master mix volume."""
        return sum(r.total_volume for r in self.reagents)

    @property
    def instructions(self):
        """Bench instructions for adding the template."""
        return (
            "Mix all components above, then aliquot. "
            f"Add {format_volume(self.template_volume)} µL of template DNA to each "
            "reaction tube separately to reach the final volume of "
            f"{self.final_volume:g} µL."
        )

    @property
    def summary(self):
        """One line description of the batch."""
        return (
            f"Calculated for {self.num_reactions} reactions (plus 10% overage) "
            f"with a final volume of {self.final_volume:g} µL using "
            f"{self.polymerase.display_name}."
        )


def scale_master_mix(polymerase, final_volume, num_reactions):
    """Scale a polymerase recipe, return a list of ScaledReagents."""
    return MasterMix(polymerase, final_volume, num_reactions).reagents


def template_volume(polymerase, final_volume):
    """Template DNA volume per reaction for a final volume."""
    return MasterMix(polymerase, final_volume).template_volume


def format_volume(volume):
    """Format a volume for display."""
    return f"{volume:.{config.VOLUME_DECIMALS}f}"
