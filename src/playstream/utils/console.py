"""Shared rich console for PlayStream output."""

from rich.console import Console

console = Console()
