"""
splice.assembly - Timeline assembly engine.

Ordering -> grouping -> placement, composed by engine.assemble().
"""

from __future__ import annotations

from splice.assembly.engine import assemble

__all__ = ["assemble"]
