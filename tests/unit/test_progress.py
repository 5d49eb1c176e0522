"""Tests for the progress notifiers."""

from __future__ import annotations

import io

from rich.console import Console

from artpreflight.progress import NullProgress, RichProgress


def test_null_progress_accepts_everything():
    progress = NullProgress()
    progress.start(3)
    progress.update(1, 3, "Artwork")
    progress.finish()


def test_rich_progress_lifecycle():
    console = Console(file=io.StringIO(), force_terminal=False)
    progress = RichProgress(console)

    progress.start(4)
    progress.update(2, 4, "Artwork")
    progress.update(4, 4, "Artwork > Inner")
    progress.finish()

    # Updates after finishing are ignored.
    progress.update(4, 4, "Artwork")


def test_update_before_start_is_ignored():
    RichProgress(Console(file=io.StringIO())).update(1, 2, "Artwork")
