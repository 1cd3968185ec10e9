"""Outcome - Loss detection over a participant's hit record."""

from __future__ import annotations
import logging

from .hits import HitRecord

logger = logging.getLogger(__name__)


def has_lost(hit_record: HitRecord | None) -> bool:
    """
    Determine if a participant has lost, i.e. every cell of every ship
    has been hit.

    A participant who has not placed ships yet (no hit record) cannot lose.
    A record with no cells at all is never treated as a loss.
    """
    if hit_record is None:
        return False

    cells = hit_record.all_cells()
    logger.debug(
        "checking hit record for loss",
        extra={"cells": len(cells), "hit": sum(1 for c in cells if c.hit)},
    )
    if not cells:
        return False
    return all(c.hit for c in cells)
