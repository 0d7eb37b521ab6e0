"""e2e-recorder: scenario outcome tracking and reports for end-to-end UI suites."""

__version__ = "0.1.0"
