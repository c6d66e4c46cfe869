"""
Filter the records of a JSON-lines file through a field mask, keeping only the
fields the mask allows. Input and output files can be plain, .gz or .bz2.

The mask can come from a named entry of an INI config file, from a JSON file
holding a mask tree, or from a list of dotted fields on the command line.

From the command line, run for example:
.venv/bin/filter_json people.jsonl.gz -o public.jsonl -f id name address.city
"""

import argparse
import json
import logging
import time

from .masks.apply_mask_to_object_graph import apply_mask_to_object_graph
from .masks.mask_algebra import is_truthy
from .masks.object_mask import ObjectMask
from .utilities.config import get_mask_from_config
from .utilities.debug_util import parse_args_and_add_logging_switch
from .utilities.file_utils import enumerate_json_lines, load_json_file, open_output

logger = logging.getLogger(__name__)


def load_mask(args):
    if args.mask_file:
        mask = ObjectMask(load_json_file(args.mask_file))
        if not mask.validate():
            raise ValueError(f"Mask in {args.mask_file} has non-boolean leaves")
        return mask
    if args.fields:
        return ObjectMask.from_field_list(args.fields)
    return get_mask_from_config(args.conf_file, args.mask)


def filter_json_lines(input_file, output, mask, report_masked_out=False, log_every=None):
    """
    Writes each record of input_file, filtered by mask, as a JSON line to the
    output stream. Returns the number of records written.
    """
    count = 0
    for line_num, record in enumerate_json_lines(input_file, log_every):
        if report_masked_out:

            def masked_out_hook(path):
                logger.info(f"Line {line_num + 1}: masked out '{path}'")

        else:
            masked_out_hook = None

        if isinstance(record, (dict, list)) and is_truthy(mask.mask):
            apply_mask_to_object_graph(record, mask.mask, masked_out_hook)
        else:
            # Scalar records, and any record under a mask that allows nothing,
            # can only be kept or dropped as a whole
            record = mask.filter_object(record, masked_out_hook)
            if record is None:
                continue

        output.write(json.dumps(record, ensure_ascii=False) + "\n")
        count += 1
    return count


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.split("\n\n")[0])
    parser.add_argument("input_file", help="The JSON-lines file to filter")
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Where to write the filtered records (default: stdout)",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--mask", "-m", help="The name of a mask defined in the config file")
    source.add_argument("--mask-file", help="A JSON file containing a mask tree")
    source.add_argument("--fields", "-f", nargs="+", help="The dotted fields to keep")
    parser.add_argument("--conf-file", "-c", help="An INI file defining named masks")
    parser.add_argument(
        "--report-masked-out",
        action="store_true",
        help="Log every field that gets masked out (needs -v to be visible)",
    )
    parser.add_argument(
        "--progress",
        type=int,
        default=None,
        help="Log a progress message every this many lines",
    )
    args = parse_args_and_add_logging_switch(parser, argv)

    if args.mask and not args.conf_file:
        parser.error("--mask requires --conf-file")

    start = time.time()
    mask = load_mask(args)
    logger.debug(f"Using mask {mask.to_object()}")

    output = open_output(args.output)
    try:
        count = filter_json_lines(args.input_file, output, mask, args.report_masked_out, args.progress)
    finally:
        if args.output not in (None, "-"):
            output.close()

    logger.info(f"Wrote {count} records")
    logger.debug(f"Time taken: {time.time() - start} seconds")


if __name__ == "__main__":
    main()
