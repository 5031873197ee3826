"""Typer command groups for the todolist CLI."""
