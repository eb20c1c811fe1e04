"""Typed records describing the documented workflow steps."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import types
import typing as typ

if typ.TYPE_CHECKING:
    from .values import MapValue, Scalar, Value


class CatalogError(ValueError):
    """Raised when the step catalog is malformed.

    Attributes
    ----------
    step_id : int or None
        Identifier of the offending step, when it could be determined.
    field : str or None
        Name of the offending field, when the error concerns one field.
    """

    def __init__(
        self, message: str, *, step_id: int | None = None, field: str | None = None
    ) -> None:
        self.step_id = step_id
        self.field = field
        super().__init__(message)


class Actor(enum.StrEnum):
    """Party performing a step."""

    USER = "USER"
    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"
    STRIPE = "STRIPE"
    DATABASE = "DATABASE"

    @property
    def legend_label(self) -> str:
        """Label used in the page legend."""
        return _ACTOR_LEGEND[self]

    @property
    def tone(self) -> str:
        """Color family name used as a CSS hook."""
        return _ACTOR_TONES[self]


_ACTOR_LEGEND: dict[Actor, str] = {
    Actor.USER: "User Action",
    Actor.FRONTEND: "Frontend",
    Actor.BACKEND: "Backend",
    Actor.STRIPE: "Stripe",
    Actor.DATABASE: "Database",
}

_ACTOR_TONES: dict[Actor, str] = {
    Actor.USER: "blue",
    Actor.FRONTEND: "indigo",
    Actor.BACKEND: "amber",
    Actor.STRIPE: "purple",
    Actor.DATABASE: "emerald",
}


@dc.dataclass(frozen=True, slots=True)
class Endpoint:
    """HTTP call summary shown in a step header."""

    method: str
    url: str
    params: str = ""

    @property
    def target(self) -> str:
        """URL with its query string appended."""
        return f"{self.url}{self.params}"


@dc.dataclass(frozen=True, slots=True)
class FormField:
    """One input collected from the user."""

    name: str
    required: bool
    example: str


@dc.dataclass(frozen=True, slots=True)
class ResponseExample:
    """Illustrative HTTP response with an optional status code."""

    body: Value
    status: int | None = None


@dc.dataclass(frozen=True, slots=True)
class DepositCalculation:
    """Deposit figures shown for a priced booking."""

    full_price: int | float
    deposit_percent: int | float
    deposit_amount: int | float
    remaining_balance: int | float
    currency: str = "£"


@dc.dataclass(frozen=True, slots=True)
class UrlParts:
    """Redirect URL split into base path and query parameters."""

    base: str
    query: MapValue


def _frozen_map(
    data: cabc.Mapping[str, typ.Any] | None = None,
) -> cabc.Mapping[str, typ.Any]:
    return types.MappingProxyType(dict(data or {}))


@dc.dataclass(frozen=True, slots=True)
class Step:
    """One node in the documented workflow.

    Only ``id``, ``actor``, ``title`` and ``description`` are required. Every
    other detail field is independently optional; ``None`` means absent.
    """

    id: int
    actor: Actor
    title: str
    description: str
    badge: str | None = None
    icon: str | None = None
    endpoint: Endpoint | None = None
    component: str | None = None
    details: cabc.Mapping[str, Scalar] | None = None
    form_fields: tuple[FormField, ...] | None = None
    request_example: Value | None = None
    response_example: ResponseExample | None = None
    logic: tuple[str, ...] | None = None
    business_hours: cabc.Mapping[str, str] | None = None
    deposit_calculation: DepositCalculation | None = None
    stripe_metadata: MapValue | None = None
    code_snippet: str | None = None
    payment_details: cabc.Mapping[str, Scalar] | None = None
    user_actions: tuple[str, ...] | None = None
    webhook_payload: Value | None = None
    webhook_processing: tuple[str, ...] | None = None
    booking_document: Value | None = None
    availability_update: Value | None = None
    displayed_info: cabc.Mapping[str, Scalar] | None = None
    actions: tuple[str, ...] | None = None
    backend_code: str | None = None
    note: str | None = None
    redirect_url: str | None = None
    url_parts: UrlParts | None = None
    extras: cabc.Mapping[str, typ.Any] = dc.field(default_factory=_frozen_map)

    def has(self, field_name: str) -> bool:
        """Return whether the optional detail ``field_name`` is present."""
        return self.value_of(field_name) is not None

    def value_of(self, field_name: str) -> object | None:
        """Return the raw value of a detail field, ``None`` when absent."""
        if field_name not in DETAIL_FIELDS:
            return None
        return getattr(self, field_name)


HEADER_FIELDS: tuple[str, ...] = (
    "id",
    "actor",
    "title",
    "description",
    "badge",
    "icon",
    "endpoint",
)

DETAIL_FIELDS: frozenset[str] = frozenset(
    field.name
    for field in dc.fields(Step)
    if field.name not in HEADER_FIELDS and field.name != "extras"
)


class StepCatalog(cabc.Sequence[Step]):
    """Immutable, ordered collection of steps."""

    __slots__ = ("_by_id", "_steps")

    def __init__(self, steps: cabc.Iterable[Step]) -> None:
        self._steps: tuple[Step, ...] = tuple(steps)
        self._by_id: cabc.Mapping[int, Step] = types.MappingProxyType(
            {step.id: step for step in self._steps}
        )

    @typ.overload
    def __getitem__(self, index: int) -> Step: ...

    @typ.overload
    def __getitem__(self, index: slice) -> cabc.Sequence[Step]: ...

    def __getitem__(self, index: int | slice) -> Step | cabc.Sequence[Step]:
        return self._steps[index]

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"StepCatalog(ids={list(self.ids)!r})"

    @property
    def ids(self) -> tuple[int, ...]:
        """Step identifiers in catalog order."""
        return tuple(step.id for step in self._steps)

    @property
    def terminal_id(self) -> int | None:
        """Identifier of the final step, or ``None`` for an empty catalog."""
        return self._steps[-1].id if self._steps else None

    def get(self, step_id: int) -> Step | None:
        """Return the step with ``step_id`` or ``None`` when unknown."""
        return self._by_id.get(step_id)

    def lookup(self, step_id: int) -> Step:
        """Return the step with ``step_id``.

        Raises
        ------
        KeyError
            If no step carries ``step_id``.
        """
        try:
            return self._by_id[step_id]
        except KeyError as exc:
            known = ", ".join(str(key) for key in self._by_id)
            msg = f"Unknown step {step_id}. Known steps: {known}"
            raise KeyError(msg) from exc


__all__ = [
    "DETAIL_FIELDS",
    "HEADER_FIELDS",
    "Actor",
    "CatalogError",
    "DepositCalculation",
    "Endpoint",
    "FormField",
    "ResponseExample",
    "Step",
    "StepCatalog",
    "UrlParts",
]
