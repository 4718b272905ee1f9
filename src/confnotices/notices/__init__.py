from __future__ import annotations

from .sink import NoticeSink, Presenter, RecordingPresenter

__all__ = ["NoticeSink", "Presenter", "RecordingPresenter"]
