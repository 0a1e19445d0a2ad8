"""
splice.export - Timeline export.

- Timecode math (non-drop-frame, integer frame rates)
- EDL (CMX 3600) encoder
- Export destinations that receive the finished EDL
"""

from __future__ import annotations
