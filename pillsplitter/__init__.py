"""Interactive pill canvas: draw, drag and crosshair-split rectangles."""
