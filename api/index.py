"""
Vercel serverless function entry point.

Vercel's Python runtime serves any ASGI ``app`` exported here; vercel.json
rewrites /api/* to this file so the FastAPI routers see the original path.
"""
from concierge.main import app

__all__ = ["app"]
