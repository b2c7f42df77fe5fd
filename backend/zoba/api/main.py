from fastapi import APIRouter

from zoba.api.routes import assistant, diagrams, render, templates, utils

api_router = APIRouter()
api_router.include_router(utils.router, tags=["utils"])
api_router.include_router(diagrams.router, prefix="/diagrams", tags=["diagrams"])
api_router.include_router(templates.router, prefix="/templates", tags=["templates"])
api_router.include_router(assistant.router, prefix="/generate-diagram", tags=["assistant"])
api_router.include_router(render.router, prefix="/render", tags=["render"])
