"""
Scanner result models
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class Prototype:
    """An accepted function prototype"""

    text: str  # Trimmed declaration, always ending in ';'
    file: str
    line: int  # Line where the declaration starts in the scanned stream (1-indexed)
    comment: Optional[str] = None  # Last comment inside the declaration, else the one before it
    inner_comment: Optional[str] = None  # Last comment inside the declaration
    is_definition: bool = False  # A function body was skipped

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScanResult:
    """Prototypes found in one input plus scan counters"""

    prototypes: List[Prototype] = field(default_factory=list)
    declarations_seen: int = 0
    rejected: int = 0  # Failed the prototype filter
    directives: int = 0  # Preprocessor lines consumed

    @property
    def summary(self) -> str:
        """Human-readable summary"""
        return (
            f"{len(self.prototypes)} prototypes from {self.declarations_seen} declarations "
            f"({self.rejected} rejected, {self.directives} directives)"
        )
