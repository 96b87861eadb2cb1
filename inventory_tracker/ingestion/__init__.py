"""
Ingestion layer: bulk item import from spreadsheet exports.

Submodules:
  item_csv    CSV import parser for InventoryItem records
"""
