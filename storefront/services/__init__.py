"""
Services Package

Menu queries, menu seeding, the storefront menu client and cart storage
backends.
"""
