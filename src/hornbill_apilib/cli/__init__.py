"""CLI `hornbill` (Typer + Rich)."""
