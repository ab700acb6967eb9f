"""Escalation pipeline: the three-level search state machine."""

from image_discovery.pipeline.escalation import (
    LEVEL_ORDER,
    LevelPolicy,
    SearchEscalationController,
)

__all__ = ["LEVEL_ORDER", "LevelPolicy", "SearchEscalationController"]
