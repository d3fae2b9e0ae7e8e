from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a turn, using the provider's wire names."""

    USER = "user"
    MODEL = "model"


class Part(BaseModel):
    """A single text part of a turn."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Text content of the part")


class Turn(BaseModel):
    """One message unit of a conversation.

    Frozen with tuple parts so a turn cannot change once it is in a transcript.
    Serializes to the provider's ``{"role", "parts": [{"text"}]}`` shape.
    """

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who authored the turn")
    parts: tuple[Part, ...] = Field(description="Ordered text parts")

    @classmethod
    def user(cls, text: str) -> "Turn":
        """Build a single-part user turn."""
        return cls(role=Role.USER, parts=(Part(text=text),))

    @classmethod
    def model(cls, text: str) -> "Turn":
        """Build a single-part model turn."""
        return cls(role=Role.MODEL, parts=(Part(text=text),))

    @property
    def text(self) -> str:
        """Concatenated text of all parts."""
        return "".join(part.text for part in self.parts)

    def to_wire(self) -> dict:
        """Serialize for a ``contents`` entry of a generateContent request."""
        return self.model_dump(mode="json")


class GenerateResult(BaseModel):
    """Successful generateContent outcome."""

    model_config = ConfigDict(frozen=True)

    reply_text: str = Field(description="Text of the first part of the first candidate")
    reply_turn: Turn = Field(description="The candidate content as a model turn")
    model: str = Field(description="Model id the request was sent to")
