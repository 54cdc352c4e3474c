"""Load the YAML run configuration and look up tool settings in it.
"""
import os
import sys

import toolz as tz
import yaml


class CmdNotFound(Exception):
    """A configured program is not an executable file.
    """
    def __init__(self, name, program):
        self.name = name
        self.program = program
        super(CmdNotFound, self).__init__("%s executable not found: %s" % (name, program))

# ## Retrieval functions

def load_config(config_file):
    """Load YAML config file, expanding environment variables and ~ in values.
    """
    with open(config_file) as in_handle:
        config = yaml.safe_load(in_handle)
    if not isinstance(config, dict):
        raise ValueError("Configuration file %s does not contain a YAML mapping" % config_file)
    config = _expand_paths(config)
    config.setdefault("resources", {})
    return config

def _expand_paths(config):
    for field, setting in config.items():
        if isinstance(setting, dict):
            config[field] = _expand_paths(setting)
        elif isinstance(setting, (list, tuple)):
            config[field] = [expand_path(x) for x in setting]
        else:
            config[field] = expand_path(setting)
    return config

def expand_path(path):
    """Expand $VARIABLES and a leading ~ in string values, passing others through.
    """
    if not isinstance(path, str):
        return path
    return os.path.expandvars(os.path.expanduser(path))

def get_resources(name, config):
    """Retrieve resources for a program, falling back to the `default` entry.
    """
    return tz.get_in(["resources", name], config,
                     tz.get_in(["resources", "default"], config, {}))

def get_program(name, config, default=None):
    """Retrieve the executable for a program from the configuration.

    Programs are specified in `resources` either as a string or as a
    dictionary with a `cmd` key. A bare name resolves next to the running
    python (conda installs) and then on the PATH.
    """
    config = config.get("config", config)
    program = expand_path(_program_name(name, tz.get_in(["resources", name], config), default))
    if os.path.dirname(program):
        search = [program]
    else:
        search = [os.path.join(d, program)
                  for d in [os.path.dirname(sys.executable)] +
                  os.environ.get("PATH", "").split(os.pathsep) if d]
    for fname in search:
        if os.path.isfile(fname) and os.access(fname, os.X_OK):
            return fname
    raise CmdNotFound(name, program)

def _program_name(name, pconfig, default):
    if isinstance(pconfig, str):
        return pconfig
    elif isinstance(pconfig, dict) and pconfig.get("cmd"):
        return pconfig["cmd"]
    return default or name
