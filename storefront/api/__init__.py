"""FastAPI application module for Storefront.

This module contains the FastAPI application factory, route handlers, and
request/response schemas for the storefront service.
"""
