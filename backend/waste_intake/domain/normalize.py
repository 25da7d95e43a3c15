from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Set

from waste_intake.core.logging_utils import log_event
from waste_intake.domain.catalogs import (
    DEFAULT_COMPANY_SIZE,
    DEFAULT_INDUSTRY,
    DEFAULT_ITEM_COUNT_RANGE,
    DEFAULT_LOCATIONS,
    DEFAULT_MATERIALS,
    DEFAULT_QUANTITY_RANGE,
    DEFAULT_RISK_APPETITE,
    DEFAULT_UNIT,
)
from waste_intake.domain.fields import (
    check_finite_number,
    check_text,
    check_truthy,
    resolve,
    value_or,
    warn,
)
from waste_intake.domain.sampling import Rng, Seed, create_rng, pick_one, random_int
from waste_intake.domain.schema import (
    Location,
    NormalizedRequest,
    NormalizeResult,
    WasteItem,
)

logger = logging.getLogger(__name__)

LOCATION_MISSING = "location missing; default location applied"
LOCATION_INCOMPLETE = "location incomplete; missing fields defaulted"
ITEMS_MISSING = "wasteItems missing or empty; generated default items"
MATERIAL_MISSING = "material missing; default material applied"
QUANTITY_MISSING = "quantity missing; default quantity applied"
UNIT_MISSING = "unit missing; default unit applied"
COMPANY_ID_MISSING = "companyId missing; generated anonymous companyId"
COMPANY_SIZE_MISSING = "companySize missing; defaulted to SME"
INDUSTRY_MISSING = "industry missing; defaulted to other"
RISK_APPETITE_MISSING = "riskAppetite missing; defaulted to cost"

_ANON_ID_SPACE = 100_000_000
_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_CIRCULAR = "[Circular]"


def normalize_request(raw: Any, seed: Optional[Seed] = None) -> NormalizeResult:
    """
    Fill every missing or malformed field of a waste disposal request.

    - non-mapping input is treated as an empty request
    - seed=None derives the seed from the input's canonical serialization,
      so the same malformed payload always gets the same defaults
    - every substituted field appends one warning, in detection order
    """
    data = raw if isinstance(raw, Mapping) else {}
    warnings: List[str] = []
    if seed is None:
        seed = canonical_seed(raw if _is_object(raw) else data)
        seed_source = "derived"
    else:
        seed_source = "explicit"
    rng = create_rng(seed)

    company_id = resolve(
        check_text(data.get("companyId")),
        lambda: _anonymous_company_id(rng),
        warnings,
        COMPANY_ID_MISSING,
    )
    company_size = resolve(
        check_truthy(data.get("companySize")),
        lambda: DEFAULT_COMPANY_SIZE,
        warnings,
        COMPANY_SIZE_MISSING,
    )
    industry = resolve(
        check_truthy(data.get("industry")),
        lambda: DEFAULT_INDUSTRY,
        warnings,
        INDUSTRY_MISSING,
    )
    risk_appetite = resolve(
        check_truthy(data.get("riskAppetite")),
        lambda: DEFAULT_RISK_APPETITE,
        warnings,
        RISK_APPETITE_MISSING,
    )

    waste_items = normalize_waste_items(data.get("wasteItems"), warnings, rng)

    request = NormalizedRequest(
        company_id=company_id,
        company_size=_as_text(company_size),
        industry=_as_text(industry),
        risk_appetite=_as_text(risk_appetite),
        waste_items=waste_items,
    )

    log_event(
        logger,
        logging.DEBUG,
        "request_normalized",
        seed_source=seed_source,
        items=len(waste_items),
        warnings=len(warnings),
    )
    return NormalizeResult(request=request, warnings=warnings)


def normalize_waste_items(value: Any, warnings: List[str], rng: Rng) -> List[WasteItem]:
    items = value if isinstance(value, (list, tuple)) else []

    if not items:
        warn(warnings, ITEMS_MISSING)
        count = random_int(*DEFAULT_ITEM_COUNT_RANGE, rng)
        return [_default_item(rng) for _ in range(count)]

    return [_normalize_item(item, warnings, rng) for item in items]


def normalize_location(value: Any, warnings: List[str], rng: Rng) -> Location:
    if not _is_object(value):
        warn(warnings, LOCATION_MISSING)
        return default_location(rng)

    fields = value if isinstance(value, Mapping) else {}
    fallback = default_location(rng)
    location = Location(
        lat=value_or(check_finite_number(fields.get("lat")), fallback.lat),
        lon=value_or(check_finite_number(fields.get("lon")), fallback.lon),
        address=value_or(check_text(fields.get("address")), fallback.address),
    )

    if (location.lat, location.lon, location.address) == (
        fallback.lat,
        fallback.lon,
        fallback.address,
    ):
        warn(warnings, LOCATION_INCOMPLETE)

    return location


def default_location(rng: Rng) -> Location:
    choice = pick_one(DEFAULT_LOCATIONS, rng)
    return Location(lat=choice.lat, lon=choice.lon, address=choice.address)


def canonical_seed(data: Any) -> str:
    """
    Stable serialization (sorted keys, compact separators) used as a seed.

    Walks the value with an explicit stack, so nesting depth is not bounded
    by the interpreter's recursion limit. Keys are stringified, tuples are
    written as lists, values JSON cannot represent are written via ``str``
    and a container that contains itself is written as ``"[Circular]"``.
    """
    parts: List[str] = []
    active: Set[int] = set()
    stack: List[Any] = [data]

    while stack:
        item = stack.pop()
        if isinstance(item, _Leave):
            active.discard(item.ident)
        elif isinstance(item, _Raw):
            parts.append(item)
        elif isinstance(item, (Mapping, list, tuple)):
            if id(item) in active:
                parts.append(_json_scalar(_CIRCULAR))
                continue
            active.add(id(item))
            stack.append(_Leave(id(item)))
            stack.extend(reversed(_expand(item)))
        else:
            parts.append(_json_scalar(item))

    return "".join(parts)


class _Raw(str):
    """Serialized JSON text emitted as-is."""


@dataclass(frozen=True)
class _Leave:
    ident: int


def _expand(container: Any) -> List[Any]:
    if isinstance(container, Mapping):
        # Later keys win when two keys stringify the same.
        entries = sorted({str(k): v for k, v in container.items()}.items())
        out: List[Any] = [_Raw("{")]
        for i, (key, value) in enumerate(entries):
            if i:
                out.append(_Raw(","))
            out.append(_Raw(_json_scalar(key) + ":"))
            out.append(value)
        out.append(_Raw("}"))
        return out

    out = [_Raw("[")]
    for i, value in enumerate(container):
        if i:
            out.append(_Raw(","))
        out.append(value)
    out.append(_Raw("]"))
    return out


def _json_scalar(value: Any) -> str:
    if value is not None and not isinstance(value, (str, int, float)):
        value = str(value)
    return json.dumps(value, ensure_ascii=False)


def _is_object(value: Any) -> bool:
    # Arrays are object-shaped with no named fields.
    return isinstance(value, (Mapping, list, tuple))


def _normalize_item(item: Any, warnings: List[str], rng: Rng) -> WasteItem:
    fields = item if isinstance(item, Mapping) else {}

    material = resolve(
        check_text(fields.get("material")),
        lambda: pick_one(DEFAULT_MATERIALS, rng),
        warnings,
        MATERIAL_MISSING,
    )
    quantity = resolve(
        check_finite_number(fields.get("quantity")),
        lambda: random_int(*DEFAULT_QUANTITY_RANGE, rng),
        warnings,
        QUANTITY_MISSING,
    )
    unit = resolve(
        check_text(fields.get("unit")),
        lambda: DEFAULT_UNIT,
        warnings,
        UNIT_MISSING,
    )
    location = normalize_location(fields.get("location"), warnings, rng)

    return WasteItem(material=material, quantity=quantity, unit=unit, location=location)


def _default_item(rng: Rng) -> WasteItem:
    material = pick_one(DEFAULT_MATERIALS, rng)
    quantity = random_int(*DEFAULT_QUANTITY_RANGE, rng)
    location = default_location(rng)
    return WasteItem(
        material=material, quantity=quantity, unit=DEFAULT_UNIT, location=location
    )


def _anonymous_company_id(rng: Rng) -> str:
    return f"ANON-{_to_base36(math.floor(rng() * _ANON_ID_SPACE))}"


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)
