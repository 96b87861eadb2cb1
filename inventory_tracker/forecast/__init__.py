"""
Forecast engine: derived stock views computed from inventory items.

Modules
-------
status   : classify_status(): Healthy / Low / Out of Stock tier.
stockout : StockoutProjection + days_until_stockout(): linear burn-down.
table    : ForecastRow + build_forecast(): reorder table sorted by urgency.

Everything here is a pure function over validated models: no DB, no I/O,
no module-level mutable state.
"""
