"""
FastAPI application factory for the employee service.

Run with::

    uvicorn --factory employee_api.app:create_app
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from employee_api.core.config import Settings, get_settings
from employee_api.core.executor import BoundedExecutor
from employee_api.core.logging_config import setup_logging
from employee_api.repositories.json_storage import JsonEmployeeRepository
from employee_api.routers import employees as employees_router
from employee_api.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with an explicitly owned repository, pool and service."""
    settings = (settings or get_settings()).validate()
    setup_logging(settings.log_level, settings.log_file)

    repository = JsonEmployeeRepository(settings.resolved_data_file)
    executor = BoundedExecutor(
        settings.core_pool_size,
        settings.max_pool_size,
        settings.queue_capacity,
        rejection_policy=settings.rejection_policy,
        thread_name_prefix=settings.thread_name_prefix,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Employee Service is starting up...")
        logger.info("Employee Service startup completed (data file: %s)", repository.data_file)
        yield
        logger.info("Employee Service is shutting down...")
        executor.shutdown(wait=True)
        logger.info("Employee Service shutdown completed")

    app = FastAPI(title="Employee Service", lifespan=lifespan)
    app.state.settings = settings
    app.state.employee_service = EmployeeService(repository, executor)
    app.include_router(employees_router.router)
    return app
