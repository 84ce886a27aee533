"""Application service: Show Stock use case (query)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.model.policy import DEFAULT_STOCK_POLICY, StockPolicy
from storefront.domain.service.catalog import Catalog


class StockLevel(Enum):
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class StockWarningDTO:
    product_name: str
    stock: int
    message: str


@dataclass(frozen=True)
class StockReportDTO:
    total_stock: int
    level: StockLevel
    warnings: list[StockWarningDTO]


class StockReportHandler:

    def __init__(
        self,
        catalog: Catalog,
        policy: StockPolicy = DEFAULT_STOCK_POLICY,
    ) -> None:
        self._catalog = catalog
        self._policy = policy

    def handle(self) -> StockReportDTO:
        warnings = [
            StockWarningDTO(
                product_name=p.name,
                stock=p.stock_qty,
                message=(
                    f"{p.name}: sold out"
                    if p.is_sold_out
                    else f"{p.name}: low stock ({p.stock_qty} left)"
                ),
            )
            for p in self._catalog.list_products()
            if p.stock_qty < self._policy.low_stock_threshold
        ]

        total = self._catalog.total_stock()
        if total < self._policy.total_stock_critical:
            level = StockLevel.CRITICAL
        elif total < self._policy.total_stock_warning:
            level = StockLevel.WARNING
        else:
            level = StockLevel.OK

        return StockReportDTO(total_stock=total, level=level, warnings=warnings)
