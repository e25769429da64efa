"""Four-letter personality codes (MBTI style) and their axes.

A code is read position by position:

- 0 energy      E (extraverted) / I (introverted)
- 1 perception  S (sensing)     / N (intuition)
- 2 judgement   T (thinking)    / F (feeling)
- 3 lifestyle   J (judging)     / P (perceiving)

Codes come from free-text student records, so parsing never raises: anything
shorter than four characters is treated as "no personality data".
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Axis definitions
# ---------------------------------------------------------------------------
Energy = Literal["E", "I"]
Perception = Literal["S", "N"]
Judgement = Literal["T", "F"]
Lifestyle = Literal["J", "P"]

# (first letter, fallback letter) per position. A letter other than the first
# one selects the fallback, so "X" in position 0 reads as "I".
AXES: tuple[tuple[str, str], ...] = (
    ("E", "I"),
    ("S", "N"),
    ("T", "F"),
    ("J", "P"),
)

CODE_LENGTH = len(AXES)


class PersonalityDimensions(BaseModel):
    """The four resolved axes of a personality code."""

    energy: Energy
    perception: Perception
    judgement: Judgement
    lifestyle: Lifestyle

    @property
    def code(self) -> str:
        return f"{self.energy}{self.perception}{self.judgement}{self.lifestyle}"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def resolve_axis_letters(code: str | None) -> tuple[str, ...] | None:
    """Return the four resolved axis letters of *code*, or ``None``.

    Only the first four characters are read, case-insensitively.
    """
    if not code or len(code) < CODE_LENGTH:
        return None
    letters = code[:CODE_LENGTH].upper()
    return tuple(
        first if letter == first else fallback
        for letter, (first, fallback) in zip(letters, AXES)
    )


def parse_personality_code(code: str | None) -> PersonalityDimensions | None:
    """Parse *code* into dimensions, or ``None`` when it is missing / too short."""
    letters = resolve_axis_letters(code)
    if letters is None:
        return None
    energy, perception, judgement, lifestyle = letters
    return PersonalityDimensions(
        energy=energy,
        perception=perception,
        judgement=judgement,
        lifestyle=lifestyle,
    )


# ---------------------------------------------------------------------------
# Motivation baseline
# ---------------------------------------------------------------------------
_MOTIVATION_BASE: dict[str, float] = {
    "EN": 4.0,
    "ES": 3.5,
    "IN": 3.0,
    "IS": 2.5,
}


def motivation_base_score(code: str | None) -> float:
    """Baseline motivation (1-5) from the energy/perception prefix of *code*.

    Extraverted-intuitive types start higher. The prefix is matched literally,
    so an unknown or empty code gets the neutral 3.0.
    """
    if not code:
        return 3.0
    return _MOTIVATION_BASE.get(code[:2].upper(), 3.0)
