#!/usr/bin/env python

# Copyright 2024-2026 Martin Junius
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# Usage
#   from csvoutput import CSVOutput
#   csv_output = CSVOutput(fields=["time", "coverage"])
#   csv_output.set_float_format(fmt="%.6f")
#   csv_output.add_samples(samples)
#   csv_output(a, b, ...)
#   csv_output.write(file="", set_locale=True)       file="" or "-" uses stdout

# ChangeLog
# Version 2.3 / 2025-11-21
#       Converted to numpy docstring format
# Version 3.0 / 2026-10-16
#       Reworked for eclipse coverage curves: no global object, field names
#       passed to constructor, .add_samples() for CoverageSample lists,
#       astropy Time values written as ISO UTC strings

import csv
import locale
import sys
from typing import TextIO, Any, Iterable, List

# AstroPy
from astropy.time import Time

# Local modules
from eclipseclasses import CoverageSample

VERSION = "3.0 / 2026-10-16"
AUTHOR  = "Martin Junius"
NAME    = "csvoutput"


DEFAULT_FLOAT_FORMAT = "%.6f"
COVERAGE_FIELDS      = ["time", "coverage"]



class CSVOutput:
    """
    CSV output class
    """

    def __init__(self, fields: List[str]=None) -> None:
        """
        Create CSV output object

        Parameters
        ----------
        fields : List[str], optional
            Field names for header row, by default None = no header
        """
        self._cache     = []
        self._fields    = fields
        self._float_fmt = DEFAULT_FLOAT_FORMAT


    def __call__(self, *args) -> None:
        """
        Make CSV output object callable, same as .add_row()
        """
        self.add_row(list(args))


    def set_default_locale(self, loc: str="") -> None:
        """
        Set default locale for CSV output

        Parameters
        ----------
        loc : str, optional
            locale name, by default "" = system locale
        """
        locale.setlocale(locale.LC_ALL, loc)


    def set_float_format(self, fmt: str=DEFAULT_FLOAT_FORMAT) -> None:
        """
        Set format for float numbers

        Parameters
        ----------
        fmt : str, optional
            %-style format string, by default DEFAULT_FLOAT_FORMAT
        """
        self._float_fmt = fmt


    def _fmt(self, v: Any) -> str:
        if isinstance(v, Time):
            return v.utc.isot
        if isinstance(v, float):
            return locale.format_string(self._float_fmt, v)
        return str(v)


    def add_row(self, data: list) -> None:
        """
        Add data row to CSV output

        Parameters
        ----------
        data : list
            List of values [a, b, c, ...]
        """
        self._cache.append(data)


    def add_samples(self, samples: Iterable[CoverageSample]) -> None:
        """
        Add rows for coverage samples

        Parameters
        ----------
        samples : Iterable[CoverageSample]
            Coverage curve
        """
        for s in samples:
            self.add_row([s.time, float(s.coverage)])


    def _write(self, f: TextIO) -> None:
        # Use ; as separator if locale uses decimal comma
        if locale.localeconv()['decimal_point'] == ",":
            writer = csv.writer(f, dialect="excel", delimiter=";")
        else:
            writer = csv.writer(f, dialect="excel")
        if self._fields:
            writer.writerow(self._fields)
        for row in self._cache:
            writer.writerow([ self._fmt(v) for v in row ])


    def write(self, file: str=None, set_locale: bool=True) -> None:
        """
        Write CSV output to file or stdout

        Parameters
        ----------
        file : str, optional
            Filename, by default None or "-" = write to stdout
        set_locale : bool, optional
            Automatically set default system locale, by default True
        """
        if set_locale:
            self.set_default_locale()

        if file and file != "-":
            with open(file, 'w', newline='', encoding="utf-8") as f:
                self._write(f)
        else:
            self._write(sys.stdout)
