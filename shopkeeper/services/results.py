from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

ValidationErrors = Dict[str, str]


@dataclass(frozen=True)
class MutationResult:
    """
    Outcome of a validated mutation.

    On success ``record`` holds the new record and ``products`` the product
    collection as it should look afterwards. On failure only ``errors`` is set
    and nothing should be committed.
    """

    record: Optional[Any] = None
    products: List[Any] = field(default_factory=list)
    errors: ValidationErrors = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def failed(cls, errors: ValidationErrors) -> "MutationResult":
        return cls(errors=dict(errors))


@dataclass(frozen=True)
class ItemsResult:
    """Line item list after an interactive add, plus any field errors."""

    items: List[Any]
    errors: ValidationErrors = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
