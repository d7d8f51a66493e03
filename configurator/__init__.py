"""
Package Configurator
====================

Custom package configuration and pricing engine for the storefront.

This module provides:
- Catalog ingestion (features, add-ons, usage tiers)
- Live price derivation with plan discounts and support surcharges
- The multi-step configuration wizard and its selection rules
- A storefront API adapter for catalog fetch and selection submit
"""

__version__ = "1.0.0"
