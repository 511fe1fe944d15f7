"""Editor-wide services: telemetry, configuration, and session state."""
