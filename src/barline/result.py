"""
Scan Result Dataclasses

Shared data structures for scanner results.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ScanLine:
    """Runs read from one horizontal scan strip."""
    row: int                  # First image row of the strip
    runs: List[int]           # Bar/space widths, padding trimmed
    candidate: Optional[str] = None  # Decoder output, None if undecodable


@dataclass
class ScanResult:
    """Complete scan of one image."""
    text: str                 # Merged result ("" if nothing decoded)
    lines: List[ScanLine]     # Every strip, in scan order
    candidates: List[str] = field(default_factory=list)  # Decoded strings fed to the merge
    width: int = 0
    height: int = 0
    processing_time_ms: float = 0.0

    @property
    def decoded(self) -> bool:
        """True if at least one strip decoded."""
        return bool(self.candidates)
