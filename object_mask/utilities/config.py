"""
Reading named masks from an INI configuration file, such as:

    [masks]
    public = id, name, address.city
    everything = _

    [mask:admin]
    tree = {"_": true, "password": false}

Entries of the [masks] section are lists of dotted fields (separated by commas
and/or whitespace), turned into masks with ObjectMask.from_field_list().
A [mask:<name>] section gives a full mask tree as JSON instead.
"""

import configparser
import json
import logging
import os
import re

from ..masks.object_mask import ObjectMask

logger = logging.getLogger(__name__)

MASKS_SECTION = "masks"
MASK_SECTION_PREFIX = "mask:"

field_separator_regex = re.compile(r"[\s,]+")


def read_config(conf_file):
    """
    Read the passed-in configuration file
    """
    if conf_file is None or not os.path.exists(conf_file):
        raise ValueError(f"Config file {conf_file} cannot be found.")
    config = configparser.ConfigParser()
    config.read(conf_file)
    return config


def parse_field_list(value):
    return [field for field in field_separator_regex.split(value) if field]


def masks_from_config(config):
    """
    Returns a dict from mask name to ObjectMask for all the masks defined in
    the config.
    """
    masks = {}
    if config.has_section(MASKS_SECTION):
        for name, value in config.items(MASKS_SECTION):
            masks[name] = ObjectMask.from_field_list(parse_field_list(value))
            logger.debug(f"Loaded field list mask '{name}'")

    for section in config.sections():
        if not section.startswith(MASK_SECTION_PREFIX):
            continue
        name = section[len(MASK_SECTION_PREFIX) :]
        if name in masks:
            raise ValueError(f"Mask '{name}' is defined more than once")
        try:
            tree = json.loads(config.get(section, "tree"))
        except configparser.NoOptionError as e:
            raise ValueError(f"Section [{section}] has no 'tree' entry") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Section [{section}] has an invalid JSON tree: {e.msg}") from e

        mask = ObjectMask(tree)
        if not mask.validate():
            raise ValueError(f"Section [{section}] has a mask with non-boolean leaves")
        masks[name] = mask
        logger.debug(f"Loaded mask tree '{name}'")

    return masks


def get_mask_from_config(conf_file, name):
    masks = masks_from_config(read_config(conf_file))
    if name not in masks:
        raise ValueError(f"Mask '{name}' not found in {conf_file}")
    return masks[name]
