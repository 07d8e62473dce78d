"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains the polymerase recipes and kinetic profiles.
Values follow the published vendor protocols for a 25 uL reaction.

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

from collections import namedtuple
from enum import Enum


class Polymerase(Enum):
    """DNA polymerase."""

    TAQ = "Taq"
    PHUSION = "Phusion"
    Q5 = "Q5"

    def __str__(self):
        return self.value

    @property
    def display_name(self):
        """Human readable polymerase name."""
        return DISPLAY_NAMES[self]

    @property
    def recipe(self):
        """Recipe at the 25 uL reference scale."""
        return RECIPES[self]

    @property
    def profile(self):
        """Kinetic profile."""
        return KINETIC_PROFILES[self]

    @classmethod
    def from_name(cls, name):
        """Look up a polymerase by (case insensitive) name."""
        if isinstance(name, cls):
            return name
        for member in cls:
            if name.strip().lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(
            f"Unknown polymerase '{name}'. "
            f"Choose one of: {', '.join(m.value for m in cls)}."
        )


Reagent = namedtuple("Reagent", "name stock_conc final_conc volume")

ROLES = (
    "buffer",
    "dntps",
    "mgcl2",
    "polymerase",
    "forward_primer",
    "reverse_primer",
    "gc_enhancer",
    "template_dna",
    "water",
)
OPTIONAL_ROLES = ("gc_enhancer",)
BULK_EXCLUDED_ROLES = ("template_dna", "water")

# mgcl2 and gc_enhancer are absent (None) for some polymerases
Recipe = namedtuple("Recipe", ROLES, defaults=[None] * len(ROLES))

KineticProfile = namedtuple(
    "KineticProfile",
    "name denaturation_temp extension_rate annealing_offset final_extension",
)

DISPLAY_NAMES = {
    Polymerase.TAQ: "Taq",
    Polymerase.PHUSION: "Phusion",
    Polymerase.Q5: "NEB Q5 High-Fidelity Polymerase",
}

RECIPES = {
    Polymerase.TAQ: Recipe(
        buffer=Reagent("10x Standard Taq Buffer", "10x", "1x", 2.5),
        dntps=Reagent("dNTPs (10 mM)", "10 mM", "200 µM", 0.5),
        mgcl2=Reagent("MgCl₂ (50 mM)", "50 mM", "1.5 mM", 0.75),
        polymerase=Reagent(
            "Taq Polymerase (5 U/µL)", "5 U/µL", "1.25 U / 25 µL", 0.25
        ),
        forward_primer=Reagent("Forward Primer (10 µM)", "10 µM", "0.4 µM", 1.0),
        reverse_primer=Reagent("Reverse Primer (10 µM)", "10 µM", "0.4 µM", 1.0),
        template_dna=Reagent("Template DNA", None, "1-10 ng", 1.0),
        water=Reagent("Nuclease-free water", None, "N/A", 17.0),
    ),
    Polymerase.PHUSION: Recipe(
        buffer=Reagent("5x Phusion HF/GC Buffer", "5x", "1x", 5.0),
        dntps=Reagent("dNTPs (10 mM)", "10 mM", "200 µM", 0.5),
        polymerase=Reagent(
            "Phusion Polymerase (2 U/µL)", "2 U/µL", "0.5 U / 25 µL", 0.25
        ),
        forward_primer=Reagent("Forward Primer (10 µM)", "10 µM", "0.5 µM", 1.25),
        reverse_primer=Reagent("Reverse Primer (10 µM)", "10 µM", "0.5 µM", 1.25),
        gc_enhancer=Reagent("5x Phusion GC Enhancer (optional)", "5x", "1x", 5.0),
        template_dna=Reagent("Template DNA", None, "1-10 ng", 1.0),
        water=Reagent("Nuclease-free water", None, "N/A", 15.75),
    ),
    Polymerase.Q5: Recipe(
        buffer=Reagent("5X Q5 Reaction Buffer", "5x", "1x", 5.0),
        dntps=Reagent("10 mM dNTPs", "10 mM", "200 µM", 0.5),
        polymerase=Reagent(
            "Q5® High-Fidelity DNA Polymerase (2 U/µL)", "2 U/µL", "0.02 U/µl", 0.25
        ),
        forward_primer=Reagent("Forward Primer (10 µM)", "10 µM", "0.5 µM", 1.25),
        reverse_primer=Reagent("Reverse Primer (10 µM)", "10 µM", "0.5 µM", 1.25),
        gc_enhancer=Reagent("5X Q5 High GC Enhancer (optional)", "5x", "1X", 5.0),
        template_dna=Reagent("Template DNA", None, "< 1,000 ng", 1.0),
        water=Reagent("Nuclease-free water", None, "N/A", 15.75),
    ),
}

KINETIC_PROFILES = {
    Polymerase.TAQ: KineticProfile(
        name="Taq Polymerase",
        denaturation_temp=95,
        extension_rate=60,  # seconds per kb
        annealing_offset=-5,
        final_extension="5-10 minutes",
    ),
    Polymerase.PHUSION: KineticProfile(
        name="Phusion High-Fidelity DNA Polymerase",
        denaturation_temp=98,
        extension_rate=15,  # fast end of the 15-30 s/kb range
        annealing_offset=0,
        final_extension="5-10 minutes",
    ),
    Polymerase.Q5: KineticProfile(
        name="Q5® High-Fidelity DNA Polymerase",
        denaturation_temp=98,
        extension_rate=10,  # fast end of the 10-30 s/kb range
        annealing_offset=0,
        final_extension="2 minutes",
    ),
}
