"""Load and validate the step catalog rendered by the flow viewer.

The catalog is an ordered, immutable list of :class:`Step` records parsed from
YAML. Each step carries a handful of always-present header fields and an
ad-hoc subset of optional detail fields; nested illustrative payloads are
stored as tagged values (:class:`ScalarValue`, :class:`ListValue`,
:class:`MapValue`). :func:`load_catalog` validates everything up front and
raises :class:`CatalogError` naming the offending step and field.

Examples
--------
>>> from flowdocs.catalog import default_catalog_path, load_catalog
>>> catalog = load_catalog(default_catalog_path())
>>> catalog.ids[:3]
(1, 2, 3)
"""

from .loader import (
    CatalogDocument,
    build_catalog,
    default_catalog_path,
    load_catalog,
    load_catalog_document,
)
from .models import (
    DETAIL_FIELDS,
    Actor,
    CatalogError,
    DepositCalculation,
    Endpoint,
    FormField,
    ResponseExample,
    Step,
    StepCatalog,
    UrlParts,
)
from .values import ListValue, MapValue, ScalarValue, Value, to_plain, to_value

__all__ = [
    "DETAIL_FIELDS",
    "Actor",
    "CatalogDocument",
    "CatalogError",
    "DepositCalculation",
    "Endpoint",
    "FormField",
    "ListValue",
    "MapValue",
    "ResponseExample",
    "ScalarValue",
    "Step",
    "StepCatalog",
    "UrlParts",
    "Value",
    "build_catalog",
    "default_catalog_path",
    "load_catalog",
    "load_catalog_document",
    "to_plain",
    "to_value",
]
