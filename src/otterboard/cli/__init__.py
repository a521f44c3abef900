"""CLI argument parser and dispatch for otterboard."""

import argparse

from otterboard.cli.analyze import analyze
from otterboard.cli.board import board_get, board_link, board_share
from otterboard.cli.boards import boards_create, boards_delete, boards_list
from otterboard.cli.web import web
from otterboard.model.snapshot import MODES

NOUNS = {"boards", "board", "analyze", "web"}


def _common_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="Config file (default: $XDG_CONFIG_HOME/otterboard/config.yaml)")
    common.add_argument("--api-url", dest="api_url", help="Board/AI service base URL")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return common


def build_tui_parser() -> argparse.ArgumentParser:
    """Parser for the default mode: open the terminal UI."""
    parser = argparse.ArgumentParser(prog="otterboard", parents=[_common_parser()])
    parser.add_argument("board", nargs="?", help="Open this board ID directly")
    return parser


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = _common_parser()

    parser = argparse.ArgumentParser(
        prog="otterboard",
        description="Whiteboard photos to editable boards",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- boards ---
    boards_p = nouns.add_parser("boards", help="Board collection operations", parents=[common])
    boards_verbs = boards_p.add_subparsers(dest="verb")

    boards_list_p = boards_verbs.add_parser("list", help="List boards", parents=[common])
    boards_list_p.set_defaults(func=boards_list)

    boards_create_p = boards_verbs.add_parser("create", help="Create an empty board", parents=[common])
    boards_create_p.add_argument("title", help="Board title")
    boards_create_p.set_defaults(func=boards_create)

    boards_delete_p = boards_verbs.add_parser("delete", help="Delete a board", parents=[common])
    boards_delete_p.add_argument("id", help="Board ID")
    boards_delete_p.set_defaults(func=boards_delete)

    # boards with no verb = list
    boards_p.set_defaults(func=boards_list)

    # --- board ---
    board_p = nouns.add_parser("board", help="Single board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_get_p = board_verbs.add_parser("get", help="Show board themes and cards", parents=[common])
    board_get_p.add_argument("id", help="Board ID")
    board_get_p.add_argument("--report", action="store_true", help="Print the markdown report and strategic gaps")
    board_get_p.set_defaults(func=board_get)

    board_share_p = board_verbs.add_parser("share", help="Share a board by email", parents=[common])
    board_share_p.add_argument("id", help="Board ID")
    board_share_p.add_argument("email", help="Collaborator email")
    board_share_p.set_defaults(func=board_share)

    board_link_p = board_verbs.add_parser("link", help="Print the board's share link", parents=[common])
    board_link_p.add_argument("id", help="Board ID")
    board_link_p.set_defaults(func=board_link)

    # --- analyze ---
    analyze_p = nouns.add_parser("analyze", help="Turn whiteboard photos into a board", parents=[common])
    analyze_p.add_argument("images", nargs="+", help="Image files")
    analyze_p.add_argument("--mode", choices=MODES, default="strategy", help="Analysis mode (default: strategy)")
    analyze_p.add_argument("--title", help="Board title (default: first image name)")
    analyze_p.add_argument("--no-color-coding", action="store_true", help="Ignore sticky-note colors")
    analyze_p.add_argument("--no-layout", action="store_true", help="Ignore spatial layout")
    analyze_p.add_argument("--no-gaps", action="store_true", help="Skip strategic gap analysis")
    analyze_p.set_defaults(func=analyze)

    # --- web ---
    web_p = nouns.add_parser("web", help="Serve the UI in a browser", parents=[common])
    web_p.add_argument("--host", default="localhost", help="Bind address (default: localhost)")
    web_p.add_argument("--port", type=int, default=8617, help="Port (default: 8617)")
    web_p.set_defaults(func=web)

    return parser
