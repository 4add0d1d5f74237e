#!/usr/bin/env python3
"""
Viewer Shell - Entry Point
==========================
Run this script to show an image.

Usage:
    python run.py photo.jpg [--mode fitdown|fit|zoom] [--port 5000] [--no-browser]
"""

from viewer_shell.app import main

if __name__ == "__main__":
    main()
