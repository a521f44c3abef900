"""Entry point for otterboard CLI."""

import logging
import sys

from otterboard.cli import NOUNS, build_parser, build_tui_parser
from otterboard.cli._common import load_config_or_die


def configure_logging(verbose: bool, log_file: str = "") -> None:
    kwargs = {"filename": log_file} if log_file else {"stream": sys.stderr}
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
        **kwargs,
    )


def main():
    argv = sys.argv[1:]

    # No noun = TUI mode
    if not NOUNS.intersection(argv) and not {"-h", "--help"}.intersection(argv[:1]):
        args = build_tui_parser().parse_args(argv)
        config = load_config_or_die(args)
        # The terminal belongs to the UI; only log when there is a file to log to.
        if config["log_file"]:
            configure_logging(args.verbose, config["log_file"])

        from otterboard.ui import OtterboardApp

        OtterboardApp(config, board_id=args.board).run()
        return

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
