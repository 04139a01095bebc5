"""
                Order SaaS Storefront

Multi-tenant restaurant ordering storefront: menu query API,
menu seeding and a persisted, observable shopping cart.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
