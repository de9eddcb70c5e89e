#!/usr/bin/env python

# Copyright 2023-2026 Martin Junius
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

# ChangeLog
# Version 1.3 / 2024-12-16
#       Added message(), just like print(), but can be disabled
# Version 2.0 / 2026-10-12
#       Merged with verboselog, output via logging for the eclipse modules,
#       non-string args are converted, logger is created lazily and
#       basicConfig() is only called once
#
#       Usage:  from verbose import message, verbose, warning, error
#               message(print-like-args)
#               verbose(print-like-args)
#               warning(print-like-args)
#               error(print-like-args)          logs and exits
#               .print_lines(line(s), ...)
#               .enable(flag=True)
#               .disable()
#               .enabled
#               .set_prog(name)         global for all objects
#               .set_errno(errno)       relevant only for error()

import argparse
import sys
import logging

VERSION = "2.0 / 2026-10-12"
AUTHOR  = "Martin Junius"
NAME    = "verbose"

LOG_FORMAT      = "%(asctime)s %(name)s:%(levelname)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOGGER  = "eclipse"



class Verbose:
    """
    Class for verbose-style objects using logging
    """
    progname: str = DEFAULT_LOGGER  # global program name = logger name
    errno: int    = 1               # exit code, 1 for generic errors
    logger: logging.Logger = None   # global logger object

    def __init__(self, flag: bool, level: int=logging.INFO, abort: bool=False):
        """
        Create verbose-style object

        :param flag: enable output flag
        :type flag: bool
        :param level: logging level, defaults to logging.INFO
        :type level: int, optional
        :param abort: exit program after output, defaults to False
        :type abort: bool, optional
        """
        self.enabled = flag
        self.level = level
        self.abort = abort


    def __call__(self, *args, **kwargs):
        """
        Make verbose-style object callable, all args are joined like print() does
        """
        if not self.enabled:
            return

        Verbose._get_logger().log(self.level, " ".join(str(a) for a in args), **kwargs)
        if self.abort:
            self._exit()


    def print_lines(self, *args, **kwargs) -> None:
        """
        Output multi-line string representation of object(s) line by line
        """
        for arg in args:
            for line in str(arg).splitlines():
                self.__call__(line, **kwargs)


    def enable(self, flag: bool=True):
        """
        Enable (default) or disable (flag=False) output

        :param flag: enable output flag, defaults to True
        :type flag: bool, optional
        """
        self.enabled = flag

    def disable(self):
        """
        Disable output
        """
        self.enabled = False

    def set_prog(self, name: str=DEFAULT_LOGGER):
        """
        Set program name, used as the logger name

        :param name: program name
        :type name: str
        """
        Verbose.progname = name
        Verbose.logger = None

    def set_errno(self, errno: int):
        """
        Set global errno for abort exit()

        :param errno: error code
        :type errno: int
        """
        Verbose.errno = errno


    @staticmethod
    def _get_logger() -> logging.Logger:
        if not Verbose.logger:
            # No-op if the application already configured logging
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            Verbose.logger = logging.getLogger(Verbose.progname)
        return Verbose.logger

    def _exit(self):
        """
        Internal, exit program
        """
        Verbose._get_logger().error(f"exiting ({Verbose.errno})")
        sys.exit(Verbose.errno)


message = Verbose(True,  logging.INFO)
verbose = Verbose(False, logging.INFO)
warning = Verbose(True,  logging.WARNING)
error   = Verbose(True,  logging.ERROR, True)



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = "Test script for verbose module",
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")

    args = arg.parse_args()

    verbose.set_prog(NAME)
    if args.verbose:
        verbose.enable()

    message("eclipse module logging, verbose", "enabled" if verbose.enabled else "disabled")
    verbose("separation", 0.123, "deg")
    verbose.print_lines("C1\nMAX\nC4")
    warning("sun below horizon")
    error.set_errno(99)
    error("test for error exit")



if __name__ == "__main__":
    main()
