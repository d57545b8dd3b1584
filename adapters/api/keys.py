"""
Typed keys for state stored on the aiohttp app and requests.
"""

from aiohttp import web
from adapters.api.loader import Services

SERVICES = web.AppKey("services", Services)

# Per-request cache of verified token claims
CLAIMS_KEY = "session_claims"
