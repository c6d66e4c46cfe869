import logging
import sys

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def add_logging_switch(parser):
    parser.add_argument(
        "--verbosity",
        "-v",
        action="count",
        default=0,
        help="verbosity level: -v for progress info, -vv for debug output",
    )


def configure_logging(verbosity):
    # Anything above -vv is treated as -vv
    level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    logging.basicConfig(stream=sys.stderr, level=level)
    return level


# Helper function to set up logging
def parse_args_and_add_logging_switch(parser, argv=None):
    add_logging_switch(parser)
    args = parser.parse_args(argv)
    configure_logging(args.verbosity)
    return args
