"""Management scripts."""
