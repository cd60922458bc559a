from enum import Enum


class Currency(str, Enum):
    USD = "USD"
    BRL = "BRL"
    EUR = "EUR"
    GBP = "GBP"
    PYG = "PYG"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def display_name(self) -> str:
        return _NAMES[self]

    @classmethod
    def is_supported(cls, code: str) -> bool:
        return code in cls._value2member_map_


_SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.BRL: "R$",
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.PYG: "₲",
}

_NAMES: dict[Currency, str] = {
    Currency.USD: "US Dollar",
    Currency.BRL: "Brazilian Real",
    Currency.EUR: "Euro",
    Currency.GBP: "British Pound",
    Currency.PYG: "Paraguayan Guarani",
}


class FieldRole(str, Enum):
    ORIGIN = "origin"
    DESTINATION = "destination"

    @property
    def other(self) -> "FieldRole":
        if self is FieldRole.ORIGIN:
            return FieldRole.DESTINATION
        return FieldRole.ORIGIN
