"""
API package containing the HTTP routes.

The top‑level ``router`` in ``api.router`` includes all domain
endpoints.  Routes are mounted at the application root because
existing clients call ``/listings`` and ``/contact`` directly.
"""
