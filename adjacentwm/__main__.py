"""
adjacentwm - Entry point.

Run with:  python -m adjacentwm [--config PATH] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path

from adjacentwm.config.settings import Settings, SettingsConfigProvider, default_settings_path
from adjacentwm.config.watcher import SettingsWatcher
from adjacentwm.core.host import Win32ActivationSink, Win32WindowEnumerator
from adjacentwm.core.keybinds import HotkeyManager
from adjacentwm.core.loop import MessageLoop
from adjacentwm.extension import AdjacentWindows
from adjacentwm.selection.selector import DirectionalWindowSelector


class SafeStreamHandler(logging.StreamHandler):
    """Handler that replaces unencodable characters instead of crashing."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            enc = getattr(self.stream, "encoding", "utf-8") or "utf-8"
            safe = msg.encode(enc, errors="replace").decode(enc, errors="replace")
            self.stream.write(safe + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the process."""
    fmt = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(handler)

    # Per-window filter decisions are very chatty
    logging.getLogger("adjacentwm.core.filter").setLevel(logging.INFO)
    logging.getLogger("watchdog").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="adjacentwm",
        description="Activate the adjacent window with a hotkey.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"settings file (default: {default_settings_path()})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)
    log = logging.getLogger("adjacentwm")

    settings = Settings(args.config or default_settings_path())
    if not settings.load():
        # First run: write the defaults so they can be edited
        assert settings.path is not None
        if not settings.path.exists():
            settings.save()

    selector = DirectionalWindowSelector(
        enumerator=Win32WindowEnumerator(),
        sink=Win32ActivationSink(),
        config=SettingsConfigProvider(settings),
    )

    hk_manager = HotkeyManager()
    loop = MessageLoop(hk_manager)
    extension = AdjacentWindows(settings, selector, hk_manager, scheduler=loop.call_soon)
    watcher = SettingsWatcher(settings)

    extension.enable()
    watcher.start()

    print("\n" + hk_manager.dump_state())
    print("=" * 60)
    print("  adjacentwm running. Press Ctrl+C to stop.")
    print(f"  Settings: {settings.path}")
    print("=" * 60 + "\n")

    try:
        loop.run()
    finally:
        watcher.stop()
        extension.disable()
        hk_manager.unregister_all()
        log.info("adjacentwm stopped.")


if __name__ == "__main__":
    main()
