"""Problems found while validating a search query."""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from ..exceptions import PreconditionError


@dataclass(frozen=True)
class ValidationError:
    """One problem with one query term.

    ``field`` is the filter name, or ``"query"`` for the query as a whole.
    """

    field: str
    message: str
    value: Optional[Any] = None

    def __str__(self) -> str:
        text = f"{self.field} {self.message}"
        return text if self.value is None else f"{text}, got {self.value!r}"


@dataclass
class ValidationResult:
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def fields(self) -> Tuple[str, ...]:
        """Names of the offending filters, in the order they were found."""
        return tuple(error.field for error in self.errors)

    def add_error(
        self, field: str, message: str, value: Optional[Any] = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(field, message, value))
        return self

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if self.is_valid:
            return "Validation passed"
        return "Invalid search query: " + "; ".join(map(str, self.errors))

    def raise_if_invalid(self) -> None:
        """Raise ``PreconditionError`` listing every problem, if there are any."""
        if self.errors:
            raise PreconditionError(str(self))
