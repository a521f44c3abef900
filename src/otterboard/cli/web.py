"""Handler for 'otterboard web' command."""

import shutil
import sys

from textual_serve.server import Server


def web(args) -> int:
    otterboard = shutil.which("otterboard")
    if otterboard is None:
        print("error: otterboard not found on PATH", file=sys.stderr)
        return 1

    command = otterboard
    if args.config:
        command += f" --config {args.config}"
    if args.api_url:
        command += f" --api-url {args.api_url}"

    server = Server(command, host=args.host, port=args.port, title="otterboard")
    print(f"serving otterboard at http://{args.host}:{args.port}")
    server.serve()
    return 0
