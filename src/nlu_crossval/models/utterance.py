"""Tokenized utterance models."""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class SlotTag(Enum):
    """
    Sentinel slot labels.

    Deliberately not a ``str`` enum: ``SlotTag.OUTSIDE`` never compares equal
    to a user-defined slot name, even one spelled "outside" or "o".
    """

    OUTSIDE = "outside"

    def __str__(self) -> str:
        return self.value


# A slot or intent label as seen by the scorers.
Label = Union[str, SlotTag]


class SlotAnnotation(BaseModel):
    """A slot span attached to a token."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    start: int = Field(ge=0)
    end: int = Field(ge=0)


class Token(BaseModel):
    """A single token with its character offset and slot annotations."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0, description="Character offset in the utterance text")
    value: str = Field(description="Surface text of the token")
    slots: tuple[SlotAnnotation, ...] = ()

    @property
    def end(self) -> int:
        """Character offset just past the token."""
        return self.offset + len(self.value)

    @property
    def slot_label(self) -> Label:
        """Gold slot label: the first annotation's name, or OUTSIDE."""
        if self.slots:
            return self.slots[0].name
        return SlotTag.OUTSIDE


class Utterance(BaseModel):
    """Tokenized representation of one text example."""

    model_config = ConfigDict(frozen=True)

    text: str
    tokens: tuple[Token, ...] = ()

    def __str__(self) -> str:
        return self.text
