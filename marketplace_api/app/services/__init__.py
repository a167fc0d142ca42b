"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services take
their collaborators (the listings store, the email relay) in their
constructor so that tests can substitute in‑memory versions.
"""
