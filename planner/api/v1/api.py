from fastapi import APIRouter

from planner.api.v1.routes_auth import router as auth_router
from planner.api.v1.routes_project import router as project_router
from planner.api.v1.routes_task import router as task_router
from planner.schemas.common import ErrorResponse

# Documented error shapes shared by every protected router.
PROTECTED_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(project_router, prefix="/projects", tags=["projects"], responses=PROTECTED_RESPONSES)
api_router.include_router(task_router, prefix="/tasks", tags=["tasks"], responses=PROTECTED_RESPONSES)
