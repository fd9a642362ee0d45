"""
Per-session UI state for the Translation Review annotation tool.

The annotations themselves live in the AnnotationController; this only
tracks what a browser session is looking at.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .sample import Sample


@dataclass
class ApplicationState:
    """
    Session state container.

    Attributes:
        current_index: Index of the currently displayed sample
        authenticated: Whether the session passed the login gate
        reviewer: Name entered at login
    """

    current_index: int = 0
    authenticated: bool = False
    reviewer: str = ""

    def get_current_sample(self, samples: Sequence[Sample]) -> Optional[Sample]:
        """Get the currently displayed sample."""
        if 0 <= self.current_index < len(samples):
            return samples[self.current_index]
        return None

    def move(self, step: int, total: int) -> bool:
        """
        Move the cursor by `step`, clamped to the sample range.

        Returns:
            True if the index changed
        """
        if total <= 0:
            return False
        new_index = min(max(self.current_index + step, 0), total - 1)
        changed = new_index != self.current_index
        self.current_index = new_index
        return changed
