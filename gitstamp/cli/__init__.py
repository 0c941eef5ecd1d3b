"""gitstamp CLI — Typer-based command-line interface.

Provides the ``gitstamp`` command with the two build-pipeline hooks
(``generate`` before the build, ``clean`` after a successful one), a
``build`` wrapper that runs a command between them, and ``show``.

All output uses Rich for formatted terminal display.
"""
