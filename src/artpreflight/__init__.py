"""artpreflight — pre-press risk detection for vector artwork."""

__version__ = "0.1.0"
