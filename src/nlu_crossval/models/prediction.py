"""Engine prediction models."""

from pydantic import BaseModel, ConfigDict, Field

from nlu_crossval.models.utterance import Label, SlotTag, Token


class PredictedIntent(BaseModel):
    """Intent chosen by the engine."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    confidence: float | None = None


class PredictedSlot(BaseModel):
    """Slot span extracted by the engine."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    start: int
    end: int

    def covers(self, token: Token) -> bool:
        """True if the span covers the whole token."""
        return self.start <= token.offset and self.end >= token.end


class Prediction(BaseModel):
    """Result of one ``Engine.predict`` call."""

    model_config = ConfigDict(extra="allow")

    intent: PredictedIntent
    slots: dict[str, PredictedSlot] = Field(
        default_factory=dict,
        description="Extracted slots keyed by slot id",
    )

    def slot_label_for(self, token: Token) -> Label:
        """Name of the first predicted slot covering ``token``, or OUTSIDE."""
        for slot in self.slots.values():
            if slot.covers(token):
                return slot.name
        return SlotTag.OUTSIDE
