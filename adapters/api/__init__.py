"""
HTTP API adapter (aiohttp).

JSON endpoints for the web client:
- auth: register, login, profile, dashboard
- tournaments: listing and joining
- rewards: catalog, claiming, claim history
- activity: recent ledger / account events
- admin: manual points grants
"""
