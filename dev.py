"""Development runner with hot reload.

Watches all .py files in the project directory and automatically restarts
the HTTP server (default) or the Telegram bot when any change is detected.

Usage:
    python dev.py          # HTTP server
    python dev.py bot      # Telegram bot
"""
import sys

from watchfiles import run_process


def _run_server():
    from server import main
    main()


def _run_bot():
    from main import main
    main()


if __name__ == "__main__":
    target = _run_bot if sys.argv[1:] == ["bot"] else _run_server
    print(f"Dev mode: watching for .py changes, {target.__name__[5:]} will restart automatically.")
    run_process(
        ".",
        target=target,
        watch_filter=lambda change, path: path.endswith(".py"),
    )
