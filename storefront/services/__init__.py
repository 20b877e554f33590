"""Request-handling logic for Storefront.

Each service loads records from an injected store, mutates them in memory
and saves them back. Services know nothing about HTTP; they raise the
exceptions defined in ``storefront.api.exceptions`` which the application
maps onto status codes.
"""
