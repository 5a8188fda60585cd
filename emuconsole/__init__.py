"""Terminal admin console for the ess-queue-ess and ess-enn-ess emulators."""

__version__ = "0.1.0"
