"""
File helpers for reading and writing JSON-lines data, plain or compressed
"""

import bz2
import gzip
import json
import logging
import sys

logger = logging.getLogger(__name__)


def open_file_based_on_extension(filename, mode):
    # Open a file, whether it's uncompressed, bz2 or gz
    if filename.endswith(".bz2"):
        return bz2.open(filename, mode, encoding="utf-8")
    elif filename.endswith(".gz"):
        return gzip.open(filename, mode, encoding="utf-8")
    else:
        return open(filename, mode, encoding="utf-8")


def open_output(filename):
    """
    Opens an output file for writing text, or returns stdout if filename is
    None or "-". The caller should only close what isn't stdout.
    """
    if filename is None or filename == "-":
        return sys.stdout
    return open_file_based_on_extension(filename, "wt")


def enumerate_json_lines(filename, log_every=None):
    """
    Enumerate the JSON records of a JSON-lines file, whether it's uncompressed,
    bz2 or gz, yielding (line_num, record). Blank lines are skipped. If
    log_every is given as an integer, log a progress message every log_every
    lines.
    """
    with open_file_based_on_extension(filename, "rt") as f:
        for line_num, line in enumerate(f):
            if log_every and line_num and line_num % log_every == 0:
                logger.info(f"Processing line {line_num} of {filename}")
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_num + 1} of {filename}: {e.msg}") from e
            yield line_num, record


def load_json_file(filename):
    with open_file_based_on_extension(filename, "rt") as f:
        return json.load(f)
