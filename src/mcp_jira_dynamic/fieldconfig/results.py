"""Tagged results of semantic field resolution."""

from dataclasses import dataclass
from typing import Literal

from ..exceptions import ConfigurationError

ResolutionSource = Literal["config", "env"]


@dataclass(frozen=True)
class Resolved:
    """A semantic field name bound to a concrete field id."""

    field_name: str
    field_id: str
    source: ResolutionSource = "config"
    field_type: str | None = None


@dataclass(frozen=True)
class Unconfigured:
    """A semantic field name that could not be bound.

    The error is carried, not raised, so a caller can gather every missing
    field of an operation before reporting.
    """

    field_name: str
    error: ConfigurationError

    @property
    def message(self) -> str:
        return str(self.error)


Resolution = Resolved | Unconfigured
