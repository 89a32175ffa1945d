from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Mapping

from ..models import SpaceName
from .entities import Actor
from .errors import AuthorizationError, NotFoundError, ValidationError

DEFAULT_PRICES: dict[SpaceName, Decimal] = {
    SpaceName.SALAO_DE_FESTAS: Decimal("227.00"),
    SpaceName.CHURRASQUEIRA: Decimal("75.00"),
}

_CENTS = Decimal("0.01")


def parse_price(raw: object) -> Decimal:
    """Coerce a price to a non-negative finite Decimal rounded to cents.

    Accepts ints, floats, Decimals and numeric strings using either ``.`` or
    ``,`` as the decimal separator. Raises ValidationError otherwise.
    """
    if isinstance(raw, bool):
        raise ValidationError(f"invalid price: {raw!r}")
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
    if not isinstance(raw, (int, float, Decimal, str)):
        raise ValidationError(f"invalid price: {raw!r}")
    try:
        amount = Decimal(str(raw))
    except InvalidOperation as exc:
        raise ValidationError(f"invalid price: {raw!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"price must be finite: {raw!r}")
    if amount < 0:
        raise ValidationError(f"price must be >= 0: {raw!r}")
    try:
        return amount.quantize(_CENTS)
    except InvalidOperation as exc:
        # too many digits to hold at cent precision
        raise ValidationError(f"price out of range: {raw!r}") from exc


class PriceCatalog:
    def __init__(self, prices: Mapping[str | SpaceName, object] | None = None) -> None:
        self._prices: dict[SpaceName, Decimal] = dict(DEFAULT_PRICES)
        if prices is not None:
            self._prices = self._validated(prices)

    def get_current_price(self, space: str | SpaceName) -> Decimal:
        try:
            return self._prices[SpaceName(space)]
        except (KeyError, ValueError) as exc:
            raise NotFoundError(f"no price for space: {space!r}") from exc

    def set_prices(self, new_prices: Mapping[str | SpaceName, object], *, actor: Actor) -> dict[SpaceName, Decimal]:
        if not actor.is_admin:
            raise AuthorizationError("only the administrator can change prices")
        # Build the full catalog first so an invalid entry leaves nothing half-applied.
        self._prices = self._validated(new_prices)
        return self.as_dict()

    def as_dict(self) -> dict[SpaceName, Decimal]:
        return dict(self._prices)

    def _validated(self, new_prices: Mapping[str | SpaceName, object]) -> dict[SpaceName, Decimal]:
        updated = dict(self._prices)
        for name, raw in new_prices.items():
            try:
                space = SpaceName(name)
            except ValueError as exc:
                raise ValidationError(f"unknown space: {name!r}") from exc
            updated[space] = parse_price(raw)
        return updated
