"""
Storefront core

Order lifecycle, return/refund workflow and delivery-eligibility checks for
the neighborhood grocery storefront.
"""

__version__ = "1.0.0"
