"""
FastAPI routers grouped by domain (auth, posts, banner).

Each module exposes an APIRouter included by app.py. Routers reach the
services through request.app.state and never touch the store directly.
"""
