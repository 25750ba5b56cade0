"""User-facing entrypoints for Pad Synth."""
