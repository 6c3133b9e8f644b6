"""Request models for the application layer."""

from sbo_core.application.dtos.observation_draft import ObservationDraft, parse_draft

__all__ = ["ObservationDraft", "parse_draft"]
