"""
Patience CLI - Command-line interface for the engine.

Usage:
    patience play [--seed N]                 Play in the terminal
    patience serve [--host H] [--port P]     Run the HTTP API
"""

import argparse
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Patience - Klondike-style solitaire engine",
        prog="patience",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, input_fn=input, output=print):
    """Run the read-eval loop until the player quits."""
    from .engine_core.snapshot import take_snapshot
    from .session import GameLoop, Session, render_text

    session = Session.new(random_seed=args.seed)
    loop = GameLoop(session)

    while True:
        output(render_text(take_snapshot(session.game_state)))
        try:
            line = input_fn("Enter command: ")
        except EOFError:
            line = "Q"

        result = loop.process_command(line)
        prefix = "" if result.success else "!! "
        output(f"{prefix}{result.message}")

        if result.quit:
            sys.exit(0)


def cmd_serve(args):
    """Serve the API with uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
