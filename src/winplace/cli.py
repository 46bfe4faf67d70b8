"""Command-line entry point: list displays and compute window placements."""

from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .calculation import WindowCalculationResult
from .geometry import Rect
from .hyprland import HyprlandIPC
from .models import Display, Window, WindowAction
from .registry import UNSUPPORTED_ACTIONS, calculate
from .screens import UsableScreens
from .store import LastActionStore
from .sway import SwayIPC
from .utils import load_settings, read_json, runtime_dir

log = logging.getLogger(__name__)

console = Console()

EXIT_NOT_APPLICABLE = 2


def detect_backend() -> HyprlandIPC | SwayIPC | None:
    """Auto-detect the running compositor.

    First checks environment variables, then probes XDG_RUNTIME_DIR
    for compositor sockets.
    """
    if os.environ.get("HYPRLAND_INSTANCE_SIGNATURE"):
        return HyprlandIPC()
    if os.environ.get("SWAYSOCK"):
        return SwayIPC()

    xdg_path = runtime_dir()

    # Hyprland: look for $XDG_RUNTIME_DIR/hypr/<signature>/.socket.sock
    hypr_dir = xdg_path / "hypr"
    if hypr_dir.is_dir():
        for child in hypr_dir.iterdir():
            if child.is_dir() and (child / ".socket.sock").exists():
                os.environ["HYPRLAND_INSTANCE_SIGNATURE"] = child.name
                log.debug("Found Hyprland socket: %s", child.name)
                return HyprlandIPC()

    # Sway: look for $XDG_RUNTIME_DIR/sway-ipc.*.sock
    for sock in xdg_path.glob("sway-ipc.*.sock"):
        if sock.is_socket():
            os.environ["SWAYSOCK"] = str(sock)
            log.debug("Found Sway socket: %s", sock.name)
            return SwayIPC()

    return None


def load_displays(path: Path | None) -> list[Display]:
    """Displays from a JSON file when given, else from the running compositor."""
    if path is not None:
        data = read_json(path)
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a JSON list of displays")
        return [Display.from_dict(d) for d in data]

    ipc = detect_backend()
    if ipc is None:
        raise ConnectionError("No supported compositor detected")
    log.debug("Detected %s compositor", ipc.name)
    return ipc.get_displays()


# ── Formatting ───────────────────────────────────────────────────────────

def _fmt_rect(rect: Rect) -> str:
    return f"{rect.x:g},{rect.y:g} {rect.width:g}x{rect.height:g}"


def format_displays(screens: UsableScreens) -> Table:
    table = Table(title="Displays", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold green")
    table.add_column("Frame", style="blue")
    table.add_column("Usable", style="yellow")
    table.add_column("Scale", justify="right")
    table.add_column("Description", style="dim")

    for i, screen in enumerate(screens.ordered_screens):
        table.add_row(
            str(i),
            screen.name,
            _fmt_rect(screen.frame),
            _fmt_rect(screens.adjusted_visible_frame(screen)),
            f"{screen.scale:g}",
            screen.description,
        )
    return table


def format_result(result: WindowCalculationResult) -> Table:
    table = Table(show_header=False, box=None)
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Action", result.resulting_action.value)
    if result.resulting_sub_action is not None:
        table.add_row("Step", result.resulting_sub_action.value)
    table.add_row("Display", result.screen.name)
    table.add_row("Rect", _fmt_rect(result.rect))
    return table


# ── Commands ─────────────────────────────────────────────────────────────

def cmd_actions(args: argparse.Namespace) -> int:
    table = Table(title="Actions", show_header=True, header_style="bold cyan")
    table.add_column("Action", style="bold green")
    table.add_column("Label")
    for action in WindowAction:
        label = action.label
        if action in UNSUPPORTED_ACTIONS:
            label += " (caller only)"
        table.add_row(action.value, label)
    console.print(table)
    return 0


def cmd_displays(args: argparse.Namespace) -> int:
    settings = load_settings()
    screens = UsableScreens(load_displays(args.displays), padding=settings.screen_edge_gap)
    if args.json:
        print(json.dumps([d.to_dict() for d in screens.ordered_screens], indent=2))
    else:
        console.print(format_displays(screens))
    return 0


def cmd_calculate(args: argparse.Namespace) -> int:
    settings = load_settings()
    window = Window(id=args.window_id, rect=Rect.parse(args.window))
    screens = UsableScreens.for_window(
        window.rect, load_displays(args.displays), padding=settings.screen_edge_gap,
    )
    action = WindowAction(args.action)

    store = None
    last_action = None
    if args.window_id is not None and not args.no_store:
        store = LastActionStore()
        last_action = store.load(args.window_id)

    result = calculate(window, screens, action, last_action, settings)
    if result is None:
        log.info("%s does not apply to window on %s", action.value, screens.current_screen.name)
        if args.json:
            print(json.dumps(None))
        else:
            console.print(f"[yellow]{action.label}: not applicable[/yellow]")
        return EXIT_NOT_APPLICABLE

    if store is not None:
        store.save(args.window_id, result.to_last_action())

    if args.json:
        print(json.dumps(result.to_last_action().to_dict(), indent=2))
    else:
        console.print(format_result(result))
    return 0


def cmd_windows(args: argparse.Namespace) -> int:
    windows = LastActionStore().list_windows()
    if args.json:
        print(json.dumps(windows))
    else:
        for window_id in windows:
            console.print(window_id, markup=False, highlight=False)
    return 0


def cmd_forget(args: argparse.Namespace) -> int:
    store = LastActionStore()
    targets = store.list_windows() if args.all else args.window_ids
    if not targets:
        raise ValueError("Name at least one window id or pass --all")
    forgotten = sum(store.clear(window_id) for window_id in targets)
    log.info("Forgot %d of %d window(s)", forgotten, len(targets))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="winplace",
        description="Compute where a window goes for a placement command.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_actions = sub.add_parser("actions", help="list placement actions")
    p_actions.set_defaults(func=cmd_actions)

    p_displays = sub.add_parser("displays", help="list usable displays in cycling order")
    p_displays.add_argument("--displays", type=Path, help="JSON file of displays instead of the compositor")
    p_displays.add_argument("--json", action="store_true", help="print JSON")
    p_displays.set_defaults(func=cmd_displays)

    p_calc = sub.add_parser("calculate", help="compute the target rectangle for an action")
    p_calc.add_argument("action", choices=[a.value for a in WindowAction])
    p_calc.add_argument("--window", required=True, metavar="X,Y,W,H", help="current window frame")
    p_calc.add_argument("--window-id", help="window identifier; enables repeated-command cycling")
    p_calc.add_argument("--displays", type=Path, help="JSON file of displays instead of the compositor")
    p_calc.add_argument("--no-store", action="store_true", help="neither read nor write the last action")
    p_calc.add_argument("--json", action="store_true", help="print the resulting record as JSON")
    p_calc.set_defaults(func=cmd_calculate)

    p_windows = sub.add_parser("windows", help="list windows with a remembered last action")
    p_windows.add_argument("--json", action="store_true", help="print JSON")
    p_windows.set_defaults(func=cmd_windows)

    p_forget = sub.add_parser("forget", help="drop remembered last actions")
    p_forget.add_argument("window_ids", nargs="*", metavar="WINDOW_ID")
    p_forget.add_argument("--all", action="store_true", help="forget every window")
    p_forget.set_defaults(func=cmd_forget)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [winplace] %(levelname)s %(message)s",
    )
    try:
        return args.func(args)
    except (OSError, ValueError) as e:
        log.warning("%s", e)
        return 1
