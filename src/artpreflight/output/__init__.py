"""Report, overlay and run-log writers."""
