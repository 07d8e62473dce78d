"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

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

__version__ = "1.0.0"

from mrpcr.polymerase import Polymerase  # noqa: E402
from mrpcr.primer import Primer, PrimerCombination, calc_tm  # noqa: E402
from mrpcr.mastermix import MasterMix, scale_master_mix, template_volume  # noqa: E402
from mrpcr.program import MissingPrimerDetailError, generate_program  # noqa: E402

__all__ = [
    "Polymerase",
    "Primer",
    "PrimerCombination",
    "MasterMix",
    "MissingPrimerDetailError",
    "calc_tm",
    "scale_master_mix",
    "template_volume",
    "generate_program",
]
