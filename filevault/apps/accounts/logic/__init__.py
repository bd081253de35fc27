"""Business logic layer for accounts app.

- Registration and credential checks
- Mapping authenticated users and requests to explicit identities

File operations never read request or session state; the transport
layer resolves a request to an identity here and passes it along.
"""
