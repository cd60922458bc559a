"""Amount field state shared by the conversion controller and its views."""

from dataclasses import dataclass

from currency_converter.domain.value_objects import Currency, FieldRole

ZERO_SENTINEL = "0,00"
LOADING_PLACEHOLDER = "..."
ERROR_MARKER = "Error"


@dataclass(slots=True)
class AmountField:
    """One of the two linked amount inputs (origin or destination).

    ``raw_text`` is what the user sees; ``canonical_value`` is the parsed
    amount behind it. Only the origin starts editable; the destination is
    unlocked explicitly for reverse entry.
    """

    role: FieldRole
    currency: Currency
    raw_text: str = ""
    canonical_value: float = 0.0
    editable: bool = True
    is_loading: bool = False

    @classmethod
    def origin(cls, currency: Currency = Currency.USD) -> "AmountField":
        return cls(
            role=FieldRole.ORIGIN,
            currency=currency,
            raw_text="1",
            canonical_value=1.0,
        )

    @classmethod
    def destination(cls, currency: Currency = Currency.BRL) -> "AmountField":
        return cls(
            role=FieldRole.DESTINATION,
            currency=currency,
            raw_text=ZERO_SENTINEL,
            editable=False,
        )

    @property
    def read_only(self) -> bool:
        return not self.editable
