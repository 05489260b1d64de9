"""
FastAPI routers grouped by domain (auth/users, reports).

Each module exposes an APIRouter included by ``swdsms.app.create_app``.
"""
