from dataclasses import dataclass, field
from typing import Annotated, Any, Generic, TypeVar

from pydantic import Field


T = TypeVar("T")
U = TypeVar("U")

Vid = Annotated[int, Field(ge=1, le=4094)]
Tier = Annotated[int, Field(ge=0)]
MTU = Annotated[int, Field(ge=0, le=65535)]


@dataclass
class Outcome(Generic[T]):  # noqa: UP046
    """A value together with the non-fatal warnings collected while producing it."""

    value: T
    warnings: list[str] = field(default_factory=list)

    def absorb(self, other: "Outcome[U]") -> U:
        """Take over the warnings of another outcome and return its value."""

        self.warnings.extend(other.warnings)
        return other.value

    def warn(self, message: str) -> None:
        """Record a warning."""

        self.warnings.append(message)


def unwrap_list(value: Any, key: str | None = None) -> list[Any]:
    """Normalize a repeated XML element into a list.

    Repeated elements arrive as a list, single ones as a bare value, and
    wrapper elements such as ``<slaves><slave/></slaves>`` as a mapping keyed
    by the child tag.
    """

    if value is None or value in ({}, ""):
        return []
    if key is not None and isinstance(value, dict):
        value = value.get(key, [])
    if isinstance(value, list):
        return value
    return [value]
