"""Lifestyle questionnaire models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from risk_projection import LifestyleAnswers


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


class LifestyleInput(BaseModel):
    """
    Lifestyle answers as submitted by the client.

    Unanswered questions may be omitted or sent as empty strings; they are
    reported together as a single validation error by the routes.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exercise: Optional[str] = ""
    diet: Optional[str] = ""
    sleep: Optional[str] = ""
    stress: Optional[str] = ""
    smoking: Optional[str] = ""
    alcohol: Optional[str] = ""
    water_intake: Optional[str] = ""
    screen_time: Optional[str] = ""

    def to_answers(self) -> LifestyleAnswers:
        return LifestyleAnswers.from_dict(self.model_dump())


class LifestyleOption(BaseModel):
    """One selectable answer for a lifestyle question."""

    code: str
    label: str


class LifestyleQuestion(BaseModel):
    """A lifestyle question and its allowed answers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field: str
    wire_key: str
    options: list[LifestyleOption]
