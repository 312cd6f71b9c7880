"""Command line entry point and Qt runtime bootstrap for Textpad."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Sequence, TextIO, cast, get_type_hints

from .main_window import MainWindow, WindowContext
from .services.settings import Preferences, SettingsStore, preferences_to_payload
from .utils import logging as logging_utils

APPLICATION_NAME = "Textpad"
ENV_PREFIX = "TEXTPAD_"

_LOGGER = logging.getLogger(__name__)
_TRUE_WORDS = frozenset({"1", "true", "yes", "on", "debug"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", "disabled"})


@dataclass(slots=True)
class QtRuntime:
    """The QApplication and the qasync loop driving it."""

    app: Any
    loop: asyncio.AbstractEventLoop


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point invoked by the `textpad` console script."""

    args, qt_args = build_parser().parse_known_args(argv)
    sys.argv = [sys.argv[0] if sys.argv else "textpad", *qt_args]

    configure_logging(_truthy_env(f"{ENV_PREFIX}DEBUG"))

    try:
        cli_overrides = _coerce_cli_overrides(args.overrides)
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    store = SettingsStore(_settings_path(args.settings_path))
    preferences = load_settings(store=store, overrides=cli_overrides)
    if args.dump_settings:
        _dump_settings(preferences, store, overrides=cli_overrides)
        return

    runtime = create_qapp()
    window = MainWindow(WindowContext(settings_store=store, preferences=preferences))
    window.show()
    if args.path:
        window.open_startup_file(args.path)
    _run_until_quit(runtime.loop)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textpad",
        description="Launch the Textpad editor or inspect its configuration.",
    )
    parser.add_argument("path", nargs="?", help="Text file to open after the window appears.")
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Preferences file to use instead of ~/.textpad/settings.json.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override a preference for this run only; may be repeated.",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective preferences as JSON and exit.",
    )
    return parser


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Route application and Qt log records through :mod:`textpad.utils.logging`."""

    level = logging.DEBUG if debug else logging.INFO
    log_path = logging_utils.setup_logging(level, force=force)
    _LOGGER.debug("Logging to %s at %s", log_path, logging.getLevelName(level))
    _install_qt_message_handler()


def load_settings(
    path: Path | None = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Preferences:
    """Return the effective preferences, or defaults when the store is unreadable."""

    store = store or SettingsStore(path)
    try:
        return store.load(overrides=overrides or None)
    except OSError as exc:
        _LOGGER.warning("Could not read preferences from %s: %s", store.path, exc)
        return Preferences()


def create_qapp() -> QtRuntime:
    """Create (or reuse) the QApplication and bind a qasync loop to it."""

    from PySide6.QtWidgets import QApplication
    from qasync import QEventLoop

    app = cast(Any, QApplication.instance() or QApplication(sys.argv))
    app.setApplicationName(APPLICATION_NAME)
    app.setApplicationDisplayName(APPLICATION_NAME)

    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)
    app.aboutToQuit.connect(loop.stop)
    return QtRuntime(app=app, loop=loop)


def _run_until_quit(loop: asyncio.AbstractEventLoop) -> None:
    try:
        loop.run_forever()
    except KeyboardInterrupt:  # pragma: no cover - manual shutdown path
        _LOGGER.info("Interrupted; shutting down.")
    finally:
        _drain_event_loop(loop)
        loop.close()


def _drain_event_loop(loop: asyncio.AbstractEventLoop) -> None:
    """Cancel whatever is still scheduled on ``loop`` so it can close cleanly."""

    if loop.is_closed():
        return

    async def _cancel_pending() -> None:
        this_task = asyncio.current_task()
        pending = [task for task in asyncio.all_tasks(loop) if task is not this_task and not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _LOGGER.debug("Cancelled %d pending task(s) at shutdown.", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)
        with contextlib.suppress(RuntimeError, NotImplementedError):
            await loop.shutdown_asyncgens()

    try:
        loop.run_until_complete(_cancel_pending())
    except RuntimeError as exc:
        _LOGGER.debug("Event loop could not be drained: %s", exc)


def _install_qt_message_handler() -> None:
    """Forward Qt's own diagnostics to the ``PySide6`` logger."""

    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    qt_logger = logging.getLogger("PySide6")
    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _forward(kind, _context, message):  # type: ignore[no-untyped-def]
        qt_logger.log(levels.get(kind, logging.INFO), message)

    qInstallMessageHandler(_forward)


def _settings_path(cli_value: str | None) -> Path | None:
    raw = cli_value or os.environ.get(f"{ENV_PREFIX}SETTINGS_PATH")
    return Path(raw).expanduser() if raw else None


def _truthy_env(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_WORDS


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    """Parse ``--set`` entries into typed :class:`Preferences` field values."""

    annotations = get_type_hints(Preferences)
    known = {item.name for item in fields(Preferences)}
    overrides: Dict[str, Any] = {}
    for entry in items:
        name, separator, raw_value = entry.partition("=")
        name = name.strip()
        if not separator:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        if not name:
            raise ValueError("Override is missing a field name.")
        if name not in known:
            raise ValueError(f"Unknown setting '{name}'.")
        converter = _CONVERTERS.get(annotations[name], str)
        overrides[name] = converter(raw_value.strip())
    return overrides


def _parse_bool(value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


_CONVERTERS: Dict[Any, Callable[[str], Any]] = {
    bool: _parse_bool,
    int: lambda raw: int(raw, 10),
}


def _dump_settings(
    preferences: Preferences,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
    stream: TextIO | None = None,
) -> None:
    """Write the effective preferences and where they came from as JSON."""

    report = {
        "settings": preferences_to_payload(preferences),
        "meta": {
            "path": str(store.path),
            "cli_overrides": sorted(overrides),
            "environment_variables": sorted(name for name in os.environ if name.startswith(ENV_PREFIX)),
        },
    }
    out = stream or sys.stdout
    json.dump(report, out, indent=2)
    out.write("\n")
