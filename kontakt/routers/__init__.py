"""
FastAPI routers grouped by domain (public cards, signatures).

Each module exposes an APIRouter that the application (app.py) includes.
"""
