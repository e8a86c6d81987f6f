"""Interactive wizard that burns a telemetry dashboard onto a video."""

__version__ = "0.3.0"
