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
# Version 0.6 / 2025-06-29
#       Method .get() now supports nested keys, e.g. config.get("main", "sub", "setting")
# Version 1.0 / 2026-10-12
#       Reworked for the eclipse modules: built-in defaults, deep merge of
#       config files, .get() keeps falsy values and supports default=,
#       removed Windows Documents path hack
#
#       Usage:  from jsonconfig import config
#               config.get("search", "horizon_years")
#               config.read_config("my-eclipse-config.json")

import os
import sys
import argparse
import json
import copy

# The following libs must be installed with pip
from icecream import ic
# Disable debugging
ic.disable()

# Local modules
from verbose import verbose, warning, error



VERSION = "1.0 / 2026-10-12"
AUTHOR  = "Martin Junius"
NAME    = "jsonconfig"


CONFIG     = ".config"
CONFIGDIR  = "astro-python"
CONFIGFILE = "eclipse-config.json"

# Built-in defaults, overridden by config file(s)
DEFAULTS = {
    # solar system ephemeris for astropy, "builtin" or a JPL kernel like "de440"
    "ephemeris": "builtin",
    "iers": {
        "auto_download": False,
        "degraded_accuracy": "warn",
    },
    "search": {
        "horizon_years": 20,
        "step_hours": 6.0,
        "chunk_days": 365.0,
        "peak_window_hours": 6.0,
        "contact_tolerance_s": 0.05,
    },
    "coverage": {
        "samples": 100,
    },
    # named locations: [lon, lat, height]
    "locations": {
        "mallorca": [3.0176, 39.6953, 0.0],
    },
}



def merge_dict(base: dict, update: dict) -> dict:
    """
    Recursively merge dict update into a copy of base

    :param base: base dict
    :type base: dict
    :param update: dict with new values
    :type update: dict
    :return: merged dict
    :rtype: dict
    """
    merged = copy.deepcopy(base)
    for k, v in update.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = merge_dict(merged[k], v)
        else:
            merged[k] = v
    return merged



class JSONConfig:
    """ JSONConfig base class """

    def __init__(self, file: str, defaults: dict=None, warn: bool=False, err: bool=False):
        ic("config init", file)
        self.config = copy.deepcopy(defaults) if defaults else {}
        self.configfile = None
        self.read_config(file, warn, err)


    def read_config(self, file: str, warn: bool=True, err: bool=True) -> bool:
        ic(file)
        file1 = self.search_config(file)
        if file1:
            self.configfile = file1
            self.config = merge_dict(self.config, self.read_json(file1))
            return True
        if err:
            raise FileNotFoundError(f"config {file} not found")
        if warn:
            warning(f"config {file} not found")
        return False


    def info(self):
        verbose(f"config file {self.configfile or '(defaults only)'}")
        verbose("config keys:", " ".join( [k for k in self.config.keys() if not k.startswith("#")] ))


    def search_config(self, file: str) -> str:
        # If full path use as is
        if os.path.isfile(file):
            return file

        # Search config file in current directory, LOCALAPPDATA, APPDATA
        searchpath = []

        path = os.path.join(os.path.curdir, CONFIG)
        if os.path.isdir(path):
            searchpath.append(path)

        path = os.path.join(os.path.curdir, CONFIG, CONFIGDIR)
        if os.path.isdir(path):
            searchpath.append(path)

        for env in ("LOCALAPPDATA", "APPDATA"):
            appdata = os.environ.get(env)
            if appdata:
                path = os.path.join(appdata, CONFIGDIR)
                if os.path.isdir(path):
                    searchpath.append(path)

        # Add Python search path to list
        searchpath.extend([ os.path.join(d, CONFIG) for d in sys.path ])

        for path in searchpath:
            file1 = os.path.join(path, file)
            if os.path.isfile(file1):
                ic(file1)
                return file1

        return None


    def read_json(self, file: str) -> dict:
        with open(file, 'r', encoding="utf-8") as f:
            return json.load(f)


    def write_json(self, file: str):
        with open(file, 'w', encoding="utf-8") as f:
            json.dump(self.config, f, indent = 2)


    def get(self, *keys, default=None):
        cf = self.config
        for k in keys:
            if not isinstance(cf, dict) or k not in cf:
                return default
            cf = cf[k]
        return cf


    def get_keys(self):
        return self.config.keys()



# Global config object
config = JSONConfig(CONFIGFILE, DEFAULTS)



def main():
    arg = argparse.ArgumentParser(
        prog        = NAME,
        description = "Show eclipse config",
        epilog      = "Version " + VERSION + " / " + AUTHOR)
    arg.add_argument("-v", "--verbose", action="store_true", help="verbose messages")
    arg.add_argument("-d", "--debug", action="store_true", help="more debug messages")
    arg.add_argument("-c", "--config", help="read CONFIG file")
    arg.add_argument("-w", "--write", help="write merged config to file")

    args = arg.parse_args()

    verbose.set_prog(NAME)
    if args.verbose:
        verbose.enable()
    if args.debug:
        ic.enable()
        ic(sys.version_info, sys.path)
    if args.config:
        try:
            config.read_config(args.config)
        except FileNotFoundError as e:
            error(str(e))

    config.info()
    for k in config.get_keys():
        print(f"{k:12s} : {config.get(k)}")
    if args.write:
        config.write_json(args.write)



if __name__ == "__main__":
    main()
