"""PyQt6 host for the pill canvas."""
