"""Warren CLI entry point.

Provides subcommands for serving layouts over HTTP and generating a single
layout from the command line. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    from warren import __version__

    return __version__


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Warren layout generator

    Serve connected room layouts as JSON or generate one from the command
    line. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                           Bind address for the web server (default: 0.0.0.0)
          PORT                           Port for the web server (default: 5000)
          WARREN_LAYOUT_WIDTH            Grid width (default: 50)
          WARREN_LAYOUT_HEIGHT           Grid height (default: 50)
          WARREN_LAYOUT_MIN_ROOM_SIZE    Minimum partition leaf size (default: 6)
          WARREN_LAYOUT_PRUNE_PERCENT    Percent of smallest rooms to try removing (default: 0)
          WARREN_LAYOUT_MAX_ATTEMPTS     Attempts per seed before reseeding (default: 3)
          WARREN_LAYOUT_SEED             Fixed seed (default: random)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Generate a layout for a fixed seed and print a summary
          python run.py generate --seed 1337

          # Print the full layout as JSON
          python run.py generate --seed 1337 --prune 20 --json

          # Load variables from .env then generate
          python run.py --env-file .env generate
        """
    )

    parser = argparse.ArgumentParser(
        prog="Warren",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Warren {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Serve generated layouts as JSON over HTTP",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode and debug logging",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one layout and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single connected layout and print a summary or JSON.",
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="RNG seed (default: random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height")
    gen_parser.add_argument("--min-room-size", dest="min_room_size", type=int, default=None)
    gen_parser.add_argument(
        "--prune",
        type=float,
        default=None,
        help="Percentage (0-100) of smallest rooms to try removing",
    )
    gen_parser.add_argument("--max-attempts", dest="max_attempts", type=int, default=None)
    gen_parser.add_argument("--json", action="store_true", help="Print the full layout as JSON")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def _banner(title: str, rows: list[tuple[str, object]]) -> str:
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    heading = f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}" if _COLOR_ENABLED else title
    lines = [divider, f"  {heading}", divider]
    lines += [f"  {label(k + ':'):14} {value(v)}" for k, v in rows]
    lines += [divider, ""]
    return "\n".join(lines)


def run_generate(args) -> int:
    from warren.layout import ConfigurationError, GenerationFailedError, LayoutGenerator, resolve_config
    from warren.logging_utils import log

    try:
        cfg = resolve_config(
            seed=args.seed,
            width=args.width,
            height=args.height,
            min_room_size=args.min_room_size,
            percent_rooms_to_remove=args.prune,
            max_attempts=args.max_attempts,
        )
        layout = LayoutGenerator(cfg).generate()
    except ConfigurationError as e:
        print(f"[ERROR] Invalid configuration: {e}", file=sys.stderr)
        return 2
    except GenerationFailedError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    log.for_layout(layout).debug(
        event="layout_generated", rooms=len(layout.rooms), doors=len(layout.doors), attempts=layout.total_attempts
    )
    if args.json:
        print(json.dumps(layout.to_dict(), indent=2))
        return 0
    print(
        _banner(
            "Layout Generated",
            [
                ("Seed", layout.seed),
                ("Final seed", layout.final_seed),
                ("Grid", f"{layout.width}x{layout.height}"),
                ("Rooms", len(layout.rooms)),
                ("Pruned", "YES" if layout.pruned else "NO"),
                ("Doors", len(layout.doors)),
                ("Walls", len(layout.walls)),
                ("Attempts", layout.total_attempts),
                ("Reseeds", layout.reseeds),
            ],
        )
    )
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    from warren.logging_utils import log
    from warren.server import start_server

    print(_banner("Warren Layout Server", [("Mode", mode.upper()), ("Host", host), ("Port", port)]))
    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=getattr(args, "debug", False))
    return 0


def cli():
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
