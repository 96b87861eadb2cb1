"""
inventory_tracker.reporting: terminal formatting and flat-file export.

This package only renders what the engine already computed; it never reads
the store itself.

Modules:
  formatters: ASCII terminal table formatters for Typer CLI commands.
  export:     CSV/JSON flat-file export helpers.
"""
