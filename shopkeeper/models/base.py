from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Money comparisons tolerate half a cent of float drift.
MONEY_TOLERANCE = 0.005


class Record(BaseModel):
    """Immutable domain record serialized with camelCase field names."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def round_money(value: float) -> float:
    return round(float(value), 2)
