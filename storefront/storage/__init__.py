"""File-backed persistence for Storefront.

This module contains the JSON record stores backing users and products, and
the upload sink that persists product images to the upload directory.
"""
