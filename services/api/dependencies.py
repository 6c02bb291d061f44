"""
Dependency injection for FastAPI.

Resolves the per-application components created in ``create_app``.
"""

from fastapi import Request

from apps.registrar.pipeline import CreateUserPipeline
from utils.config import Settings
from utils.store import RecordStore


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_pipeline(request: Request) -> CreateUserPipeline:
    return request.app.state.pipeline
