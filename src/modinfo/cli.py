"""
Command line entry point: display information about a MOD file.
"""

import argparse
import logging
import sys

from modinfo.modsong import TruncatedInput, load_from_file
from modinfo.report import format_module, save_as_ascii


def error(s):
    print("error: %s" % s, file=sys.stderr)
    return 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Display information about a Protracker module")

    parser.add_argument("FILE", help="MOD file")
    parser.add_argument("-o", "--output", help="Write the report to this file instead of stdout")
    parser.add_argument("--no-patterns", dest="patterns", action="store_false",
                        help="leave out the pattern data")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="don't print progress messages")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print details of decoding")

    arguments = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if arguments.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    # progress goes to stdout only when it does not mix with the report
    show_progress = not arguments.quiet and arguments.output is not None

    try:
        module = load_from_file(arguments.FILE, verbose=show_progress)
    except TruncatedInput as e:
        return error(str(e))
    except OSError as e:
        return error(f"couldn't open {arguments.FILE}: {e.strerror or e}")

    if arguments.output:
        save_as_ascii(module, arguments.output, patterns=arguments.patterns, verbose=show_progress)
    else:
        print(format_module(module, patterns=arguments.patterns))

    return 0


if __name__ == "__main__":
    sys.exit(main())
