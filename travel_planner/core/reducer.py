from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


def merge_steps(existing: Optional[List[str]], new: Optional[List[str]]) -> List[str]:
    """Append newly completed steps, keeping first-completion order and no duplicates."""

    if not new:
        return list(existing or [])
    if not existing:
        logger.debug(f"Reducer: No completed steps yet, using {new}")
        existing = []

    merged = list(existing)
    for step in new:
        if step not in merged:
            merged.append(step)
    return merged


def advance_phase(existing: Optional[int], new: Optional[int]) -> int:
    """Keep the workflow phase counter from ever moving backwards."""

    if new is None:
        return existing or 0
    if existing is None:
        return new
    if new < existing:
        logger.warning(f"Reducer: Ignoring phase regression from {existing} to {new}")
        return existing
    return new
