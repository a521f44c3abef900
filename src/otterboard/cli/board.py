"""Handlers for 'otterboard board' commands."""

from otterboard.actions import share_link
from otterboard.cli._common import board_to_dict, call_api, load_config_or_die, output_json, output_result
from otterboard.model.snapshot import BoardSnapshot


def format_snapshot(snapshot: BoardSnapshot | None) -> list[str]:
    """Render a snapshot as indented text lines."""
    if snapshot is None:
        return ["  (empty)"]
    if snapshot.mode != "strategy":
        code = snapshot.diagram_code or snapshot.wireframe_code or snapshot.raw_markdown
        return [f"  {line}" for line in code.splitlines()]

    lines = []
    for group in snapshot.themes:
        color = f"  [{group.color}]" if group.color else ""
        lines.append(f"  {group.title}{color}")
        for card in group.notes:
            lines.append(f"    - {card.text}")
    if snapshot.action_plan is not None:
        lines.append("  Action plan")
        for p in snapshot.action_plan.priorities:
            lines.append(f"    * {p.title} ({p.type})")
    if snapshot.strategic_gaps:
        lines.append("  Gaps")
        lines.extend(f"    ! {gap}" for gap in snapshot.strategic_gaps)
    return lines


def board_get(args) -> int:
    """Show a board's themes and cards, or with --report its analysis write-up."""
    board = call_api(args, lambda api, ai: api.get_board(args.id))

    if args.json:
        output_json(board_to_dict(board, with_result=True))
    elif args.report:
        print(board.result.report() if board.result is not None else "")
    else:
        print(board.title)
        for line in format_snapshot(board.result):
            print(line)
    return 0


def board_share(args) -> int:
    """Share a board with another user by email."""
    board = call_api(args, lambda api, ai: api.share_board(args.id, args.email))
    output_result(board_to_dict(board), f"Shared {board.title} with {args.email}", args.json)
    return 0


def board_link(args) -> int:
    """Print the link that opens a board in the web app."""
    config = load_config_or_die(args)
    link = share_link(config["app_url"], args.id)
    output_result({"id": args.id, "link": link}, link, args.json)
    return 0
