"""
Mr. PCR: master mix and thermocycler program calculator for PCR

Copyright (C) 2020 Joshua Quick and Andrew Smith
www.github.com/aresti/mrpcr

This module contains the ProtocolReporter object.
This object extends a Protocol object to provide reporting methods.

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

import csv
import json
import logging

from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from mrpcr import config, __version__ as version
from mrpcr.mastermix import format_volume
from mrpcr.protocol import Protocol

logger = logging.getLogger("mrpcr")


MASTERMIX_HEADER = ["Component", "Stock", "Final", "Volume (µL)"]
PROGRAM_HEADER = ["Step", "Temperature", "Duration"]


class ProtocolReporter(Protocol):
    """Reporting methods to extend Protocol."""

    def __init__(self, outpath, *args, prefix=config.PREFIX, **kwargs):
        """Init ProtocolReporter."""
        self.outpath = outpath
        self.prefix = prefix
        self._programs = None
        super().__init__(*args, **kwargs)

    @property
    def programs(self):
        """Thermocycler programs, generated on first access."""
        if self._programs is None:
            self._programs = self.generate_programs()
        return self._programs

    @property
    def degenerate_combinations(self):
        """Ids of combinations where the final volume is too small."""
        return [c.id for c, mix in self.master_mixes if mix.is_degenerate]

    @property
    def sections(self):
        """(combination, MasterMix, ThermocyclerProgram) for each valid combination."""
        return [
            (combination, mix, program)
            for (combination, mix), program in zip(self.master_mixes, self.programs)
        ]

    def write_default_outputs(self):
        """Write all default output files."""
        self.write_primer_tsv()
        self.write_mastermix_tsv()
        self.write_program_tsv()
        self.write_run_report_json()
        self.write_protocol_pdf()

    def write_primer_tsv(self):
        """Write primer TSV file."""
        filepath = self.outpath / f"{self.prefix}.primers.tsv"
        logger.info(f"Writing {filepath}")

        rows = [["id", "name", "seq", "size", "%gc", "tm"]]
        for p in self.primers.values():
            rows.append([p.id, p.name, p.seq, p.size, f"{p.gc:.2f}", f"{p.tm:.2f}"])

        with open(filepath, "w") as fh:
            cw = csv.writer(fh, delimiter="\t")
            cw.writerows(rows)

    def write_mastermix_tsv(self):
        """Write master mix TSV file."""
        filepath = self.outpath / f"{self.prefix}.mastermix.tsv"
        logger.info(f"Writing {filepath}")

        rows = [
            ["combination", "reagent", "stock", "final", "per_reaction", "total"]
        ]
        for combination, mix in self.master_mixes:
            for r in mix.reagents:
                rows.append(
                    [
                        combination.id,
                        r.name,
                        r.stock_conc or "",
                        r.final_conc,
                        format_volume(r.volume),
                        format_volume(r.total_volume),
                    ]
                )

        with open(filepath, "w") as fh:
            cw = csv.writer(fh, delimiter="\t")
            cw.writerows(rows)

    def write_program_tsv(self):
        """Write thermocycler program TSV file."""
        filepath = self.outpath / f"{self.prefix}.program.tsv"
        logger.info(f"Writing {filepath}")

        rows = [["combination", "step", "temperature", "duration"]]
        for program in self.programs:
            for s in program.steps:
                rows.append([program.combination_id, s.step, s.temperature, s.duration])

        with open(filepath, "w") as fh:
            cw = csv.writer(fh, delimiter="\t")
            cw.writerows(rows)

    def write_run_report_json(self):
        """Write run report json."""
        filepath = self.outpath / f"{self.prefix}.report.json"
        logger.info(f"Writing {filepath}")
        data = {
            "polymerase": self.polymerase.value,
            "final_volume": self.final_volume,
            "template_volume": round(self.template_volume, config.VOLUME_DECIMALS),
            "combinations": len(self.valid_combinations),
            "dropped_combinations": [c.id for c in self.dropped_combinations],
            "degenerate_combinations": self.degenerate_combinations,
            "programs": [
                {
                    "combination": program.combination_id,
                    "name": program.name,
                    "steps": [s._asdict() for s in program.steps],
                }
                for program in self.programs
            ],
            "config": {
                "reference_volume": config.REFERENCE_VOLUME,
                "overage_factor": config.OVERAGE_FACTOR,
                "include_optional": self.include_optional,
                "mrpcr_version": version,
            },
        }
        filepath.write_text(json.dumps(data, ensure_ascii=False))

    def write_protocol_pdf(self):
        """Write a printable protocol sheet as PDF."""
        filepath = self.outpath / f"{self.prefix}.protocol.pdf"
        logger.info(f"Writing {filepath}")

        styles = getSampleStyleSheet()
        story = [
            Paragraph(f"PCR protocol: {escape(self.prefix)}", styles["Title"]),
            Paragraph(
                f"{self.polymerase.display_name}, {self.final_volume:g} µL reactions",
                styles["Normal"],
            ),
            Spacer(1, 0.5 * cm),
        ]

        for combination, mix, program in self.sections:
            story.append(
                Paragraph(
                    f"{escape(self.combination_name(combination))} "
                    f"({combination.fragment_size} bp)",
                    styles["Heading2"],
                )
            )
            story.append(Paragraph(mix.summary, styles["Normal"]))
            if mix.is_degenerate:
                story.append(
                    Paragraph(
                        "WARNING: final volume too small for this recipe.",
                        styles["Normal"],
                    )
                )
            rows = [MASTERMIX_HEADER] + [
                [r.name, r.stock_conc or "", r.final_conc, format_volume(r.total_volume)]
                for r in mix.reagents
            ]
            story.append(self._table(rows))
            story.append(Paragraph(mix.instructions, styles["Normal"]))
            story.append(Spacer(1, 0.3 * cm))

            rows = [PROGRAM_HEADER] + [list(s) for s in program.steps]
            story.append(self._table(rows))
            story.append(Spacer(1, 0.5 * cm))

        doc = SimpleDocTemplate(str(filepath), pagesize=A4, title=self.prefix)
        doc.build(story)

    def _table(self, rows):
        table = Table(rows, hAlign="LEFT")
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                    ("FONTSIZE", (0, 0), (-1, -1), 8),
                    ("ALIGN", (-1, 1), (-1, -1), "RIGHT"),
                ]
            )
        )
        return table
