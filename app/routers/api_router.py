from fastapi import APIRouter
from app.routers import employees, leave, promotions, resignations

# Centralized API router hub
# This follows the "Leaf Node" pattern: Routers are aggregated here,
# and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(employees.router, tags=["Employees"])
api_router.include_router(leave.router, tags=["Leave"])
api_router.include_router(promotions.router, tags=["Promotions"])
api_router.include_router(resignations.router, tags=["Resignations"])
api_router.include_router(resignations.alumni_router, tags=["Alumni"])
