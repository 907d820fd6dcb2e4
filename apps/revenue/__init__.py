"""
Revenue App - Investor Revenue Distribution

When a funded product sells, a fixed share of the sale's profit is paid out
to the product's investors in proportion to their stake.

Architecture:
- distribution: cent-precise arithmetic and the typed snapshots it runs on
- store: ledger store interface and its Django ORM implementation
- services: RevenueDistributor and the distribute_revenue helper
- views: POST /api/revenue/distribute/
- Models: RevenueDistribution (one row per committed order)
"""
