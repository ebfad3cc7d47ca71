#!/usr/bin/env python
"""Desktop app entrypoint for SavingsCircle (pass --view for the read-only viewer)."""

import sys

import flet as ft

from savingscircle.desktop.app import main, viewer_main

if __name__ == "__main__":
    ft.app(target=viewer_main if "--view" in sys.argv[1:] else main)
