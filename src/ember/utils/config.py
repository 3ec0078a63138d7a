"""Module in charge of loading EMBER configuration files.

Configuration files are YAML files. On top of the standard YAML syntax, the
loader supports:
- `key: !include other.yaml` to insert another file as a block;
- a top-level `include: base.yaml` (or a list of files) whose content is
  loaded first and then updated with the rest of the file;
- dot-notation keys (`dedx.use_median: false`) to override a single nested
  parameter of an included block.
"""

import os
import re
from copy import deepcopy

import yaml

__all__ = ["ConfigLoader", "load_config", "parse_config"]

# Matches dot-notation override keys, e.g. `dedx.sce.name`
DOTTED_KEY = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)+$")


class ConfigLoader(yaml.SafeLoader):
    """YAML loader which understands the `!include` tag."""

    def __init__(self, stream):
        """Initialize the loader.

        Parameters
        ----------
        stream : _io.TextIOWrapper
            Output of python's `open` function on a yaml file
        """
        # Included files are looked up relative to the including file
        self._root = os.path.split(stream.name)[0]

        super().__init__(stream)

    def include(self, node):
        """Load and include a YAML file that is requested in the base config.

        Parameters
        ----------
        node : yaml.Node
            Node holding the name of the file to include
        """
        filename = os.path.join(self._root, self.construct_scalar(node))
        with open(filename, "r", encoding="utf-8") as f:
            return yaml.load(f, Loader=ConfigLoader)


ConfigLoader.add_constructor("!include", ConfigLoader.include)


def _merge(base, update):
    """Recursively merge `update` into a copy of `base`."""
    result = deepcopy(base)
    for key, value in update.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value

    return result


def _set_nested(config, key_path, value):
    """Set a nested value in a dictionary using dot notation."""
    keys = key_path.split(".")
    current = config
    for key in keys[:-1]:
        if key not in current:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ValueError(f"Cannot set '{key_path}': '{key}' is not a dictionary")
        current = current[key]

    # Values given as strings are parsed to their YAML type
    if isinstance(value, str):
        try:
            value = yaml.safe_load(value)
        except yaml.YAMLError:
            pass

    current[keys[-1]] = value


def load_config(cfg_path):
    """Load a configuration file to a dictionary.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    root_dir = os.path.dirname(os.path.abspath(cfg_path))
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.load(f, Loader=ConfigLoader)

    if cfg is None:
        return {}

    # Split the file into includes, overrides and regular blocks
    includes = cfg.pop("include", [])
    if isinstance(includes, str):
        includes = [includes]
    elif not isinstance(includes, list):
        raise ValueError(
            f"'include' must be a string or list of strings, got {type(includes)}"
        )

    overrides = {k: cfg.pop(k) for k in list(cfg) if DOTTED_KEY.match(k)}

    # Load the included files first, in order, then the file itself
    config = {}
    for include in includes:
        include_path = os.path.join(root_dir, include)
        if not os.path.exists(include_path):
            raise FileNotFoundError(f"Included file not found: {include_path}")
        config = _merge(config, load_config(include_path))

    config = _merge(config, cfg)

    # Apply the dot-notation overrides last
    for key_path, value in overrides.items():
        _set_nested(config, key_path, value)

    return config


def parse_config(cfg):
    """Returns a configuration dictionary, loading it first if needed.

    Parameters
    ----------
    cfg : Union[str, dict]
        Path to a YAML configuration file or configuration dictionary

    Returns
    -------
    dict
        Configuration dictionary
    """
    if isinstance(cfg, (str, os.PathLike)):
        return load_config(cfg)

    return deepcopy(cfg)
