"""Dropin CLI — Typer-based command-line interface.

Provides the ``dropin`` command with subcommands for one-shot builds,
validation-only checks, navigation previews, watch mode and the scale
benchmark.

All output uses Rich for formatted terminal display.
"""
