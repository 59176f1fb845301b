"""Text processors: auto-linking, sanitizing and rendering."""
