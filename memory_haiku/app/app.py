"""Application wiring for the memory-haiku project."""

from __future__ import annotations

from typing import List, Optional

from memory_haiku.core import HaikuComposer, NltkTagger, SyllableOracle
from memory_haiku.core.tagging import TaggerService
from memory_haiku.utils.observability import get_logger

from .services.result_formatter import format_candidates
from .services.session_service import HaikuCandidate, HaikuSession


class MemoryHaikuApp:
    """High-level facade bundling the composer and a session."""

    def __init__(
        self,
        *,
        composer: Optional[HaikuComposer] = None,
        oracle: Optional[SyllableOracle] = None,
        tagger: Optional[TaggerService] = None,
        session: Optional[HaikuSession] = None,
    ) -> None:
        self._logger = get_logger(__name__).bind(component="app_facade")

        self.composer = composer or HaikuComposer(
            oracle=oracle or SyllableOracle(),
            tagger=tagger or NltkTagger(),
        )
        self.session = session or HaikuSession(self.composer)

        self._logger.info(
            "Application dependencies wired",
            context={
                "tagger": type(self.composer.tagger).__name__,
                "syllable_service": type(self.composer.oracle.service).__name__,
            },
        )

    # Public API ------------------------------------------------------------
    def generate(self, text: str) -> List[HaikuCandidate]:
        return self.session.generate(text)

    def regenerate(self) -> List[HaikuCandidate]:
        return self.session.regenerate()

    def select(self, index: int) -> HaikuCandidate:
        return self.session.select(index)

    def clear(self) -> None:
        self.session.clear()

    def format_candidates(self, *, show_counts: bool = False) -> str:
        return format_candidates(
            self.session.candidates,
            show_counts=show_counts,
            selected_index=self.session.selected_index,
        )


__all__ = ["MemoryHaikuApp"]
