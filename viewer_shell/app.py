#!/usr/bin/env python3
"""
Viewer Shell
============
Shows a single image, given on the command line, in a browser window.

Usage:
    python -m viewer_shell.app photo.jpg [--mode fit] [--port 5000] [--no-browser]

Or run directly:
    python run.py photo.jpg
"""

import argparse
import asyncio
import logging
import os
import threading
import time
import webbrowser

from flask import Flask, jsonify, render_template_string, send_file, url_for

from .shell import DEFAULT_MODE, TargetKind, ViewerMode, ViewerShell
from .surface import HostEnvironment

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_PORT = 5000
BROWSER_DELAY = 1.0  # seconds

# =============================================================================
# Flask App
# =============================================================================

def create_app(shell: ViewerShell) -> Flask:
    """Build the app that serves ``shell``'s surface."""
    app = Flask(__name__)

    @app.route("/")
    def index():
        surface = shell.surface
        src = url_for("serve_image") if shell.target and shell.target.kind is TargetKind.IMAGE else None
        return render_template_string(
            INDEX_HTML,
            region_id=surface.region_id,
            content=surface.html(src_override=src),
            title=shell.target.path if shell.target and shell.target.path else "Viewer",
        )

    @app.route("/image")
    def serve_image():
        """Send the displayed file; the browser does the decoding."""
        target = shell.target
        if target is None or target.kind is not TargetKind.IMAGE:
            logger.warning("Image requested but none is displayed")
            return jsonify(success=False, error="No image displayed"), 404
        try:
            response = send_file(os.path.abspath(target.path), conditional=True)
        except OSError as e:
            logger.error(f"Cannot read {target.path}: {e}")
            return jsonify(success=False, error="File no longer available"), 404
        response.headers['Cache-Control'] = 'no-cache'
        return response

    @app.route("/status")
    def status():
        return jsonify(shell.status())

    return app


# =============================================================================
# HTML Template
# =============================================================================

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <style>
    * { box-sizing: border-box; margin: 0; padding: 0; }

    :root {
      --bg: #0f0f0f;
      --text-dim: #888;
    }

    html, body {
      height: 100%;
      font-family: -apple-system, sans-serif;
      background: var(--bg);
      color: var(--text-dim);
    }

    #{{ region_id }} {
      width: 100vw;
      height: 100vh;
      display: flex;
      align-items: center;
      justify-content: center;
      overflow: hidden;
    }

    #{{ region_id }} p { font-size: 14px; }

    /* Scaling modes */
    #{{ region_id }} img[data-mode="fitdown"] {
      max-width: 100%;
      max-height: 100%;
      object-fit: contain;
    }

    #{{ region_id }} img[data-mode="fit"] {
      width: 100%;
      height: 100%;
      object-fit: contain;
    }

    #{{ region_id }}:has(img[data-mode="zoom"]) {
      display: block;
      overflow: auto;
    }

    #{{ region_id }} img[data-mode="zoom"] { max-width: none; }
  </style>
</head>
<body>
  <div id="{{ region_id }}">{{ content }}</div>
</body>
</html>
"""


# =============================================================================
# Main
# =============================================================================

def open_browser(port: int):
    """Open browser after a short delay."""
    time.sleep(BROWSER_DELAY)
    url = f"http://localhost:{port}"
    print(f"\n  Opening browser: {url}\n")
    webbrowser.open(url)


def parse_mode(value: str) -> ViewerMode:
    try:
        return ViewerMode.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Viewer Shell - Show one image in a browser window",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py photo.jpg                # Shrink large images to fit
  python run.py photo.jpg --mode zoom    # Natural size, scrollable
  python run.py photo.jpg --no-browser   # Don't auto-open browser
        """
    )
    parser.add_argument("path", nargs="?", help="Image file to show")
    parser.add_argument(
        "--mode", type=parse_mode, default=DEFAULT_MODE,
        help="Scaling mode: fitdown, fit or zoom (default: fitdown)",
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Port to run on (default: {DEFAULT_PORT})")
    parser.add_argument("--no-browser", action="store_true", help="Don't auto-open browser")
    return parser


def prepare(argv=None) -> tuple:
    """Parse arguments and run the shell once. Returns ``(shell, args)``."""
    args = build_parser().parse_args(argv)

    env = HostEnvironment([args.path] if args.path else [])
    shell = ViewerShell.from_environment(env, mode=args.mode)
    asyncio.run(shell.launch(env))
    return shell, args


def main(argv=None):
    shell, args = prepare(argv)
    app = create_app(shell)

    print(f"\n  Showing: {shell.target.path or '(nothing)'} [{shell.mode}]")
    print(f"  Server running on: http://localhost:{args.port}")
    print("  Press Ctrl+C to stop\n")

    # Open browser in background thread
    if not args.no_browser:
        threading.Thread(target=open_browser, args=(args.port,), daemon=True).start()

    app.run(
        host="127.0.0.1",  # Localhost only
        port=args.port,
        debug=False,
    )


if __name__ == "__main__":
    main()
