"""Narration engines and the factory that picks one from config."""

from __future__ import annotations

from playstream.core.config import EngineConfig
from playstream.engine.base import NarrationEngine, NarrationHandle
from playstream.engine.simulated import SimulatedEngine

BACKENDS = ("simulated", "pyttsx3")

__all__ = ["BACKENDS", "NarrationEngine", "NarrationHandle", "SimulatedEngine", "create_engine"]


def create_engine(config: EngineConfig | None = None) -> NarrationEngine:
    """Build the narration engine named by ``config.backend``.

    Raises:
        ValueError: If the backend is unknown.
        ImportError: If the backend's optional library is missing.
    """
    if config is None:
        config = EngineConfig()

    if config.backend == "simulated":
        return SimulatedEngine(
            words_per_minute=config.words_per_minute,
            spurious_finish_on_cancel=config.spurious_finish_on_cancel,
        )
    if config.backend == "pyttsx3":
        from playstream.engine.pyttsx3_engine import Pyttsx3Engine

        return Pyttsx3Engine(words_per_minute=config.words_per_minute)

    raise ValueError(f"Unknown engine backend: {config.backend!r} (expected one of {BACKENDS})")
