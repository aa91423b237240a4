"""
Geoview CLI - Main entry point.

Renders GeoJSON maps offscreen, resolves taps and replays recorded input.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import cv2
import yaml

from geoview_map import Feature
from geoview_map.rendering import CYAN
from geoview_render import FrameSurface, GeoJsonView, RenderConfig, VideoSinkSurface

logger = logging.getLogger(__name__)

FIRST_FRAME_TIMEOUT = 30.0


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Setup console (and optional file) logging.

    Args:
        verbose: Log DEBUG (per-frame timings) instead of INFO
        log_file: Optional path to log file
    """
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
            *(
                [logging.FileHandler(log_file)]
                if log_file
                else []
            )
        ]
    )


def load_json_file(path: str) -> Any:
    """
    Load a GeoJSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the JSON is invalid
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")


def load_yaml_events(path: str) -> List[Dict[str, Any]]:
    """
    Load a list of decoded input events from YAML.

    Example YAML:
        - {input: scale, factor: 2.0, focus_x: 640, focus_y: 360, delay_ms: 200}
        - {input: scroll, dx: 50, dy: 0}
        - {input: tap, x: 400, y: 300, delay_ms: 500}

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the YAML is invalid or not a list of mappings
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Gesture file not found: {path}")

    try:
        with open(file_path) as f:
            events = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}")

    if not isinstance(events, list) or not all(isinstance(e, dict) for e in events):
        raise ValueError(f"{path} must contain a list of input events")

    return events


def build_view(args: argparse.Namespace) -> GeoJsonView:
    """Create a view from --config and load the map file."""
    config = RenderConfig.from_yaml(Path(args.config)) if args.config else RenderConfig()
    view = GeoJsonView(config)
    view.load_geojson(load_json_file(args.map))
    return view


def highlight_selection(view: GeoJsonView) -> None:
    """Install a press listener that paints the selected feature cyan."""
    selection: Dict[str, Any] = {"feature": None, "color": view.default_fill_color}

    def on_press(feature: Feature) -> None:
        previous = selection["feature"]
        if previous is not None:
            previous.fill_color = selection["color"]

        selection["feature"] = feature
        selection["color"] = feature.fill_color
        feature.fill_color = CYAN
        logger.info(f"Selected {dict(feature.properties)}")

    view.set_feature_press_listener(on_press)


def start_and_wait(view: GeoJsonView, surface: FrameSurface) -> None:
    """Start rendering and block until the first frame (LOD models ready)."""
    view.on_surface_available(surface)
    if not surface.wait_for_frames(1, timeout=FIRST_FRAME_TIMEOUT):
        view.on_surface_destroyed()
        raise RuntimeError(f"No frame rendered within {FIRST_FRAME_TIMEOUT}s")


def render_command(args: argparse.Namespace) -> int:
    view = build_view(args)

    if args.scale != 1.0:
        view.scale_by(args.scale, 0.0, 0.0)
    offset_x, offset_y = args.offset
    if offset_x or offset_y:
        scale = view.render_loop.camera.state.scale
        view.scroll(-offset_x * scale, -offset_y * scale)

    surface = FrameSurface(args.width, args.height)
    start_and_wait(view, surface)
    view.on_surface_destroyed()

    Path(args.output).parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(args.output, surface.last_frame):
        raise RuntimeError(f"Failed to write image: {args.output}")

    print(f"✓ Rendered {len(view.get_all_features())} features to {args.output}")
    return 0


def pick_command(args: argparse.Namespace) -> int:
    view = build_view(args)

    surface = FrameSurface(args.width, args.height)
    start_and_wait(view, surface)
    try:
        feature = view.tap(args.x, args.y)
    finally:
        view.on_surface_destroyed()

    if feature is None:
        print(f"No feature at ({args.x}, {args.y})", file=sys.stderr)
        return 1

    print(json.dumps(dict(feature.properties), indent=2, ensure_ascii=False))
    return 0


def replay_command(args: argparse.Namespace) -> int:
    events = load_yaml_events(args.gestures)
    view = build_view(args)
    highlight_selection(view)

    with VideoSinkSurface(args.output, args.width, args.height, fps=args.fps) as surface:
        start_and_wait(view, surface)
        try:
            for event in events:
                delay = float(event.get("delay_ms", args.delay_ms)) / 1000.0
                frames = surface.submitted_frames
                view.dispatch(event)
                # Frame for this event (none for a missed tap), then the pause
                surface.wait_for_frames(frames + 1, timeout=delay)
                surface.hold(delay)
        finally:
            view.on_surface_destroyed()

    print(f"✓ Replayed {len(events)} events, {surface.written_frames} frames to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geoview",
        description="Geoview CLI - Render and query GeoJSON MultiPolygon maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render the whole map
  geoview render maps/seas.geojson -o out/seas.png

  # Zoomed-in render with a custom style
  geoview --config config/render.yaml render maps/seas.geojson -o out/zoom.png --scale 3 --offset -200 -100

  # Which feature is under a screen point?
  geoview pick maps/seas.geojson 640 360

  # Replay recorded gestures into a video
  geoview replay maps/seas.geojson gestures.yaml -o out/replay.mp4
"""
    )

    # Global arguments
    parser.add_argument("--config", help="Render config YAML (default: built-in defaults)")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-frame timings")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_surface_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("map", help="Path to GeoJSON FeatureCollection")
        sub.add_argument("--width", type=int, default=1280, help="Surface width (default: 1280)")
        sub.add_argument("--height", type=int, default=720, help="Surface height (default: 720)")

    render = subparsers.add_parser("render", help="Render one frame to an image")
    add_surface_args(render)
    render.add_argument("-o", "--output", required=True, help="Output image path (.png, .jpg)")
    render.add_argument("--scale", type=float, default=1.0, help="Camera scale (default: 1.0)")
    render.add_argument(
        "--offset", type=float, nargs=2, default=(0.0, 0.0), metavar=("X", "Y"),
        help="Camera offset in model pixels (default: 0 0)"
    )

    pick = subparsers.add_parser("pick", help="Print properties of the feature at a screen point")
    add_surface_args(pick)
    pick.add_argument("x", type=float, help="Screen x")
    pick.add_argument("y", type=float, help="Screen y")

    replay = subparsers.add_parser("replay", help="Replay input events into a video")
    add_surface_args(replay)
    replay.add_argument("gestures", help="YAML list of input events")
    replay.add_argument("-o", "--output", required=True, help="Output video path (.mp4)")
    replay.add_argument("--fps", type=int, default=30, help="Output video FPS (default: 30)")
    replay.add_argument(
        "--delay-ms", type=float, default=100.0,
        help="Pause after each event without its own delay_ms (default: 100)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.log_file)

    commands = {
        "render": render_command,
        "pick": pick_command,
        "replay": replay_command,
    }

    try:
        return commands[args.command](args)
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
