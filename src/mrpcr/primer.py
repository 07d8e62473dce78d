"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains classes and functions related to primers.

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

import re

from mrpcr import config

INVALID_BASES = re.compile(f"[^{config.VALID_BASES}]")


class Primer:
    """A primer."""

    def __init__(self, id, name="", seq=""):
        """Init Primer."""
        self.id = id
        self.name = name or id
        self.seq = seq

    def __str__(self):
        """Primer string representation."""
        return f"{self.name}:{self.seq}"

    @property
    def size(self):
        """Primer size (length)."""
        return len(self.seq)

    @property
    def seq(self):
        """Primer sequence."""
        return self.__seq

    @seq.setter
    def seq(self, seq):
        """Set normalized seq and calculate derived characteristics."""
        self.__seq = normalize_seq(seq)
        self.gc = calc_gc(self.seq)
        self.tm = calc_tm(self.seq)


class PrimerCombination:
    """A forward / reverse primer pair and the reaction it is used in."""

    def __init__(
        self,
        id,
        forward_id,
        reverse_id,
        fragment_size=config.FRAGMENT_SIZE,
        num_reactions=config.NUM_REACTIONS,
    ):
        """Init PrimerCombination."""
        if forward_id == reverse_id:
            raise ValueError(
                f"Combination '{id}' uses primer '{forward_id}' as both forward "
                "and reverse primer."
            )
        self.id = id
        self.forward_id = forward_id
        self.reverse_id = reverse_id
        self.fragment_size = fragment_size
        self.num_reactions = num_reactions

    def __str__(self):
        return (
            f"{self.id}:{self.forward_id}/{self.reverse_id}:"
            f"{self.fragment_size}bp:{self.num_reactions}x"
        )

    def resolves(self, primers):
        """Do both primer ids resolve in a {id: Primer} mapping?"""
        return self.forward_id in primers and self.reverse_id in primers


def normalize_seq(seq):
    """Uppercase a sequence and strip anything that is not A, T, G or C."""
    if not seq:
        return ""
    return INVALID_BASES.sub("", str(seq).upper())


def calc_gc(seq):
    """Calculate percent GC for a sequence."""
    seq = normalize_seq(seq)
    if not seq:
        return 0.0
    return 100.0 * (seq.count("G") + seq.count("C")) / len(seq)


def calc_tm(seq):
    """
    Calculate Tm for a sequence.

    Sequences shorter than 14 nt use the Wallace rule, 2(A+T) + 4(G+C).
    Longer sequences use 64.9 + 41(G+C - 16.4) / length.
    Returns 0 when no valid bases remain after normalization.
    """
    seq = normalize_seq(seq)
    length = len(seq)
    if not length:
        return 0.0

    at = seq.count("A") + seq.count("T")
    gc = seq.count("G") + seq.count("C")

    if length < config.TM_LENGTH_THRESHOLD:
        weights = config.TM_WALLACE_WEIGHTS
        return float(weights.at * at + weights.gc * gc)

    formula = config.TM_GC_FORMULA
    return formula.base + formula.factor * (gc - formula.gc_offset) / length
