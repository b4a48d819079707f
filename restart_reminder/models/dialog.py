"""Models describing dialogs shown to the user."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class WindowType(str, Enum):
    """Presentation styles supported by the presenter."""

    UTILITY = "utility"
    HUD = "hud"


class DialogRequest(BaseModel):
    """Everything the presenter needs to draw one dialog."""

    model_config = ConfigDict(frozen=True)

    window_type: WindowType = WindowType.HUD
    title: str
    heading: str | None = None
    description: str
    buttons: List[str] = Field(..., min_length=1, max_length=2)
    default_button: int | None = None
    cancel_button: int | None = None
    icon: Path
    timeout_seconds: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _check_button_indices(self) -> "DialogRequest":
        for label, index in (("default_button", self.default_button), ("cancel_button", self.cancel_button)):
            if index is not None and not 1 <= index <= len(self.buttons):
                raise ValueError(f"{label} must reference one of the {len(self.buttons)} button(s)")
        return self


class DialogChoice(BaseModel):
    """Outcome of a dialog: the 1-indexed button pressed, or ``None`` on timeout."""

    model_config = ConfigDict(frozen=True)

    button: int | None = None

    @classmethod
    def pressed(cls, button: int) -> "DialogChoice":
        return cls(button=button)

    @classmethod
    def timed_out(cls) -> "DialogChoice":
        return cls(button=None)

    @property
    def is_timeout(self) -> bool:
        return self.button is None


__all__ = ["WindowType", "DialogRequest", "DialogChoice"]
