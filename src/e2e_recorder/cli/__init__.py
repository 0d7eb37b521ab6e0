"""e2e-recorder command-line interface."""
