from backend.models.color import (
    TRANSPARENT,
    ChannelRange,
    ColorName,
    ColorSample,
    ColorSwatch,
    RGBRange,
)
from backend.models.preferences import PreferenceStore
from backend.models.question import (
    Answer,
    AnsweredRecord,
    Difficulty,
    GameMode,
    NameAnswer,
    Question,
    SampleAnswer,
    skipped_answer,
)

__all__ = [
    "TRANSPARENT",
    "Answer",
    "AnsweredRecord",
    "ChannelRange",
    "ColorName",
    "ColorSample",
    "ColorSwatch",
    "Difficulty",
    "GameMode",
    "NameAnswer",
    "PreferenceStore",
    "Question",
    "RGBRange",
    "SampleAnswer",
    "skipped_answer",
]
