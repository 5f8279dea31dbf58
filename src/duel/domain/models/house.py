from __future__ import annotations

from enum import Enum


class House(str, Enum):
    GRYFFINDOR = "gryffindor"
    SLYTHERIN = "slytherin"
    RAVENCLAW = "ravenclaw"
    HUFFLEPUFF = "hufflepuff"

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def colour(self) -> str:
        return HOUSE_COLOURS[self]

    @classmethod
    def normalize(cls, value: str | None) -> "House":
        raw = str(value or "").strip().lower()
        for item in cls:
            if item.value == raw:
                return item
        raise ValueError(f"Not a house: {value}")

    @classmethod
    def is_valid(cls, value: str | None) -> bool:
        raw = str(value or "").strip().lower()
        return any(item.value == raw for item in cls)


HOUSE_COLOURS = {
    House.GRYFFINDOR: "red",
    House.SLYTHERIN: "green",
    House.RAVENCLAW: "blue",
    House.HUFFLEPUFF: "yellow",
}
