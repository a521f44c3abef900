"""Handler for 'otterboard analyze'."""

from pathlib import Path

from otterboard.actions import analyze_to_board, encode_image
from otterboard.cli._common import board_to_dict, call_api, error, output_result


def analyze(args) -> int:
    """Turn whiteboard photos into a new board."""
    images = []
    for path in args.images:
        if not Path(path).is_file():
            error(f"no such file: {path}", args.json)
        images.append(encode_image(path))

    options = {
        "useColorCoding": not args.no_color_coding,
        "respectLayout": not args.no_layout,
        "gapAnalysis": not args.no_gaps,
    }
    title = args.title or Path(args.images[0]).stem
    board = call_api(args, lambda api, ai: analyze_to_board(api, ai, images, args.mode, title, options))

    themes = len(board.result.themes) if board.result is not None else 0
    cards = sum(len(g.notes) for g in board.result.themes) if board.result is not None else 0
    output_result(
        board_to_dict(board, with_result=True),
        f"Created board {board.id}: {board.title} ({themes} themes, {cards} cards)",
        args.json,
    )
    return 0
