"""
Accessibility Preference Schemas

A closed set of named options, each with a default. Stored blobs are
versioned; reading an old or damaged blob fills in defaults instead of
failing, so adding an option never breaks existing users.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from elderease.schemas.base import CamelModel

logger = logging.getLogger(__name__)

PREFERENCES_VERSION = 1


class FontSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"


class ContrastMode(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    BLUE = "blue"


class TutorialSpeed(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class AccessibilityPreferences(CamelModel):
    """Accessibility options for one user."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "fontSize": "medium",
                "contrast": "normal",
                "voiceEnabled": False,
                "tutorialSpeed": "normal",
                "reducedMotion": False,
                "simpleLayout": False,
                "version": 1,
            }
        },
    )

    font_size: FontSize = FontSize.MEDIUM
    contrast: ContrastMode = ContrastMode.NORMAL
    voice_enabled: bool = False
    tutorial_speed: TutorialSpeed = TutorialSpeed.NORMAL
    reduced_motion: bool = False
    simple_layout: bool = False
    version: int = PREFERENCES_VERSION

    @classmethod
    def from_stored(cls, blob: Any) -> "AccessibilityPreferences":
        """
        Build preferences from a stored blob of any vintage.

        Missing keys take their default, values that are not valid for
        their option are replaced by the default, unknown keys are dropped.
        The result is always tagged with the current version.
        """
        if not isinstance(blob, dict):
            if blob is not None:
                logger.warning(f"Ignoring non-mapping preferences blob: {type(blob).__name__}")
            return cls()

        data = {}
        for name, field in cls.model_fields.items():
            if name == "version":
                continue
            key = field.alias or name
            if key in blob:
                raw = blob[key]
            elif name in blob:
                raw = blob[name]
            else:
                continue
            try:
                cls.model_validate({key: raw})
            except ValidationError:
                logger.warning(f"Invalid stored value for preference {key!r}: {raw!r}; using default")
                continue
            data[key] = raw

        return cls.model_validate(data)

    def to_stored(self) -> dict:
        """Blob written to the database and to the session cache."""
        return self.model_dump(by_alias=True, mode="json")
