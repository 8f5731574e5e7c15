"""Command-line entry point: parse an SDSL file and print it as JSON."""

import argparse
import logging
import sys

import orjson

import sdsl

logger = logging.getLogger("sdsl")

description = """\
Parses an SDSL document and prints it as JSON.
"""


def parse_options(args: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sdsl", description=description)
    parser.add_argument(
        "--version", action="version", version=f"sdsl {sdsl.__version__}"
    )
    parser.add_argument("file", metavar="FILE", help="SDSL file to parse.")
    parser.add_argument(
        "--indent",
        action="store_true",
        help="Indent the JSON output by two spaces.",
    )
    parser.add_argument(
        "--max-depth",
        metavar="N",
        type=int,
        default=None,
        help="Reject documents nesting more than N containers.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug messages."
    )
    options = parser.parse_args(args)
    if options.max_depth is not None and options.max_depth < 1:
        parser.error("--max-depth must be a positive integer")
    return options


def main(args: list[str] | None = None) -> int:
    options = parse_options(args)
    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    option = orjson.OPT_INDENT_2 if options.indent else 0
    try:
        with sdsl.SdslFile(options.file, max_depth=options.max_depth) as doc:
            output = orjson.dumps(doc.data, option=option)
    except (sdsl.SDSLDecodeError, sdsl.InvalidFileExtensionError) as e:
        logger.error("%s: %s", options.file, e)
        return 1
    except orjson.JSONEncodeError as e:
        logger.error("%s: cannot be written as JSON: %s", options.file, e)
        return 1
    except OSError as e:
        logger.error("%s", e)
        return 1

    sys.stdout.write(output.decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
