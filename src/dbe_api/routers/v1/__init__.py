from fastapi import APIRouter

from dbe_api.routers.v1 import reports

v1_router = APIRouter(prefix="/v1")

v1_router.include_router(reports.router)
