"""
model_insight.reporting — Number rendering and terminal reports.

Modules:
  number_format — Locale-aware number formatting used by every narrative.
  formatters    — ASCII report formatters for Typer CLI commands.
"""
