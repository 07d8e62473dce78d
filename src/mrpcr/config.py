"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains config values.

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

# CLI defaults
PREFIX = "mrpcr"
OUTPUT_PATH = "./output"
POLYMERASE = "Taq"
FINAL_VOLUME = 25.0
NUM_REACTIONS = 8
FRAGMENT_SIZE = 500

# Master mix scaling
REFERENCE_VOLUME = 25.0  # recipes are defined per 25 uL reaction
OVERAGE_FACTOR = 1.1
VOLUME_DECIMALS = 2

# Tm estimation
VALID_BASES = "ATGC"
TM_LENGTH_THRESHOLD = 14  # length >= threshold uses the GC formula
WallaceWeights = namedtuple("WallaceWeights", "at gc")
TM_WALLACE_WEIGHTS = WallaceWeights(2, 4)
GCFormula = namedtuple("GCFormula", "base factor gc_offset")
TM_GC_FORMULA = GCFormula(64.9, 41, 16.4)

# Thermocycler program
StepDurations = namedtuple("StepDurations", "denaturation annealing")
CYCLE_LABEL = "30-35x"
CYCLE_DURATIONS = StepDurations("10s", "20s")
INITIAL_DENATURATION_DURATION = "30 seconds"
EXTENSION_TEMP = 72
MIN_EXTENSION_SECONDS = 10
ANNEALING_DECIMALS = 1
HOLD_TEMP = "4-10°C"
HOLD_DURATION = "∞"
