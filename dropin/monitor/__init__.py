"""Dropin diagnostics — terminal rendering of discovery passes.

Modules
-------
renderer
    ``DiagnosticsRenderer`` turns issues, navigation, pass results and
    benchmark reports into Rich renderables.
"""
