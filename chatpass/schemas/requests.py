from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkRequestIn(BaseModel):
    # Validated loosely: anything unusable falls back to the default.
    duration: Any = Field(None, description="Link validity in minutes")


class ControlIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = Field(None, max_length=32)
    aria_label: Optional[str] = Field(None, alias="ariaLabel", max_length=500)
    text: Optional[str] = Field(None, max_length=500)


class SignalIn(BaseModel):
    kind: Literal["keypress", "click"]
    key: Optional[str] = Field(None, max_length=32)
    shift: bool = False
    control: Optional[ControlIn] = None
