"""Handlers for 'otterboard boards' commands."""

from otterboard.cli._common import board_to_dict, call_api, output_json, output_result


def boards_list(args) -> int:
    """List boards, most recently updated first."""
    boards = call_api(args, lambda api, ai: api.list_boards())
    boards = sorted(boards, key=lambda b: b.updated_at or "", reverse=True)

    if args.json:
        output_json([board_to_dict(b) for b in boards])
        return 0

    if not boards:
        print("no boards")
    for b in boards:
        updated = (b.updated_at or "")[:10]
        shared = f"  shared with {len(b.collaborators)}" if b.collaborators else ""
        print(f"{b.id}  {b.title:<30} {updated}{shared}")
    return 0


def boards_create(args) -> int:
    """Create an empty board."""
    board = call_api(args, lambda api, ai: api.create_board(args.title))
    output_result(board_to_dict(board), f"Created board {board.id}: {board.title}", args.json)
    return 0


def boards_delete(args) -> int:
    """Delete a board."""

    async def _delete(api, ai):
        await api.delete_board(args.id)

    call_api(args, _delete)
    output_result({"deleted": args.id}, f"Deleted board {args.id}", args.json)
    return 0
