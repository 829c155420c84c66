"""Command line interface of skos2jskos."""

import argparse
import logging
import sys
import textwrap
from pathlib import Path

from pydantic import ValidationError

from skos2jskos import __version__, setup_logging
from skos2jskos.config import ConversionConfig, load_config_file
from skos2jskos.convert import convert
from skos2jskos.errors import ConfigurationError, Skos2JskosError

logger = logging.getLogger(__name__)


class DecentFormatter(argparse.HelpFormatter):
    """
    An argparse formatter that preserves newlines & keeps indentation.
    """

    def _fill_text(self, text, width, indent):
        """
        Reformat text while keeping newlines for lines shorter than width.
        """
        lines = []
        for line in textwrap.indent(textwrap.dedent(text), indent).splitlines():
            lines.append(textwrap.fill(line, width, subsequent_indent=indent))
        return "\n".join(lines)

    def _split_lines(self, text, width):
        """
        Conserve indentation in help/description lines when splitting long lines.
        """
        lines = []
        for line in textwrap.dedent(text).splitlines():
            if not line.strip():  # pragma: no cover
                continue
            indent = " " * (len(line) - len(line.lstrip()))
            lines.extend(
                textwrap.fill(line, width, subsequent_indent=indent).splitlines()
            )
        return lines


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with 1 on usage errors like any other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def create_parser():
    parser = ArgumentParser(
        prog="skos2jskos",
        description=(
            "Convert a SKOS vocabulary to JSKOS. Writes the concept scheme to "
            "scheme.json and its concepts to concepts.json."
        ),
        allow_abbrev=False,
        formatter_class=DecentFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        help="The version of skos2jskos.",
        action="store_true",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="verboser",
        default=0,
        help="More verbose output. Repeat to increase verbosity (-vv or -vvv).",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        dest="quieter",
        help="Less verbose output. Repeat to reduce verbosity (-qq or -qqq).",
    )
    parser.add_argument(
        "--config",
        help="Path to a TOML config file with a [skos2jskos] section.",
        type=Path,
    )
    parser.add_argument(
        "-l",
        "--logfile",
        help=(
            "Activate logging to a file at given path. "
            "The path will be created if it is not existing."
        ),
        type=Path,
    )

    source = parser.add_argument_group("Input (use one)")
    source.add_argument(
        "-u",
        "--url",
        dest="source_url",
        help="URL of an RDF document to convert.",
    )
    source.add_argument(
        "-e",
        "--endpoint",
        dest="sparql_endpoint",
        help="URL of a SPARQL endpoint to query.",
    )
    source.add_argument(
        "--format",
        dest="rdf_format",
        help=(
            "RDF serialization of the input (e.g. turtle, xml, nt, json-ld). "
            "Guessed from the file extension by default."
        ),
    )
    source.add_argument(
        "FILE",
        nargs="*",
        type=Path,
        help="Local RDF file(s) to convert.",
    )

    output = parser.add_argument_group("Output")
    output.add_argument(
        "-O",
        "--outdir",
        help='Existing directory to write the JSON files to. (default: ".")',
        metavar="DIRECTORY",
        type=Path,
    )
    output.add_argument(
        "-n",
        "--name",
        help='Prefix for the output files, e.g. "NAME-scheme.json".',
    )
    output.add_argument(
        "--language",
        help='Language tag for literals without one. (default: "en")',
    )
    output.add_argument(
        "-s",
        "--scheme",
        help="URI of the concept scheme. Required if the data has more than one.",
    )
    output.add_argument(
        "--keep-quotes",
        help="Do not remove double quotes that enclose a whole note.",
        action="store_true",
    )
    return parser


def process_common_options(args, raw_args):
    # set up logging
    loglevel = logging.INFO + (args.quieter - args.verboser) * 10
    logfile = args.logfile
    if logfile is None:
        setup_logging(loglevel)
    else:
        logfile.parents[0].mkdir(exist_ok=True, parents=True)
        setup_logging(loglevel, logfile)

    logger.info("Executing cmd: skos2jskos %s", " ".join(raw_args))
    logger.debug("Processing common options.")


def build_config(args) -> ConversionConfig:
    """Merge options from the config file (if any) with command line options."""
    settings = {} if args.config is None else load_config_file(args.config)
    if args.FILE:
        settings["source_files"] = args.FILE
    for name in (
        "source_url",
        "sparql_endpoint",
        "rdf_format",
        "outdir",
        "name",
        "language",
        "scheme",
    ):
        value = getattr(args, name)
        if value is not None:
            settings[name] = value
    if args.keep_quotes:
        settings["unquote_notes"] = False
    try:
        return ConversionConfig(**settings)
    except ValidationError as exc:
        msgs = "; ".join(err["msg"] for err in exc.errors())
        msg = f"Invalid configuration: {msgs}"
        logger.error(msg)
        raise ConfigurationError(msg) from exc


def main_cli(raw_args=None):
    """Setup CLI app and run the conversion based on args."""
    parser = create_parser()

    if not raw_args:
        parser.print_help()
        msg = "No input given. Provide RDF files, a URL or a SPARQL endpoint."
        raise ConfigurationError(msg)

    # Parse the command-line arguments
    #   parse_args will call sys.exit(1) if invalid arguments are given.
    args = parser.parse_args(raw_args)
    if args.version:
        print(f"skos2jskos {__version__}")
        return
    process_common_options(args, raw_args)
    config = build_config(args)
    logger.debug("Converting %s", config.input_description)
    convert(config)


def run_cli_app(raw_args=None):
    """Entry point for running the cli app."""
    if raw_args is None:
        raw_args = sys.argv[1:]
    try:
        main_cli(raw_args)
    except Skos2JskosError as e:
        logger.error("Terminating with error: %s", e)  # noqa: TRY400
        sys.exit(1)
    except Exception:  # pragma: no cover
        logger.exception("Unexpected error.")
        sys.exit(1)


if __name__ == "__main__":
    run_cli_app(sys.argv[1:])
