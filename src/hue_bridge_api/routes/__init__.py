"""HTTP routes for the Hue bridge API."""
