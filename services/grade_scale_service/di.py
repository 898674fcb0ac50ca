from __future__ import annotations

from typing import Any, AsyncIterator

from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from gradescale_core.config_enums import Environment
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from services.grade_scale_service.config import Settings, settings
from services.grade_scale_service.implementations.grade_scale_repository_mock_impl import (
    MockGradeScaleRepositoryImpl,
)
from services.grade_scale_service.implementations.grade_scale_repository_postgres_impl import (
    PostgreSQLGradeScaleRepositoryImpl,
)
from services.grade_scale_service.implementations.grade_scale_service_impl import (
    GradeScaleServiceImpl,
)
from services.grade_scale_service.protocols import (
    GradeScaleRepositoryProtocol,
    GradeScaleServiceProtocol,
)


def uses_mock_repository(service_settings: Settings) -> bool:
    return (
        service_settings.ENVIRONMENT == Environment.TESTING
        or service_settings.USE_MOCK_REPOSITORY
    )


class DatabaseProvider(Provider):
    @provide(scope=Scope.APP)
    async def provide_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        database_url = settings.DATABASE_URL
        engine_kwargs: dict[str, Any] = {"pool_pre_ping": settings.DATABASE_POOL_PRE_PING}
        if database_url.startswith("postgresql"):
            engine_kwargs.update(
                pool_size=settings.DATABASE_POOL_SIZE,
                max_overflow=settings.DATABASE_MAX_OVERFLOW,
                pool_recycle=settings.DATABASE_POOL_RECYCLE,
            )

        engine = create_async_engine(database_url, **engine_kwargs)
        yield engine
        await engine.dispose()


class RepositoryProvider(Provider):
    @provide(scope=Scope.APP)
    def provide_grade_scale_repository(self, engine: AsyncEngine) -> GradeScaleRepositoryProtocol:
        return PostgreSQLGradeScaleRepositoryImpl(engine)


class MockRepositoryProvider(Provider):
    @provide(scope=Scope.APP)
    def provide_grade_scale_repository(self) -> GradeScaleRepositoryProtocol:
        return MockGradeScaleRepositoryImpl()


class ServiceProvider(Provider):
    def __init__(self, service_settings: Settings | None = None) -> None:
        super().__init__()
        self._settings = service_settings or settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return self._settings

    @provide(scope=Scope.APP)
    def provide_grade_scale_service(
        self, repo: GradeScaleRepositoryProtocol
    ) -> GradeScaleServiceProtocol:
        return GradeScaleServiceImpl(repo)


def create_container(service_settings: Settings | None = None) -> AsyncContainer:
    """Build the DI container, wiring the in-memory repository in testing."""
    service_settings = service_settings or settings
    providers: list[Provider] = [ServiceProvider(service_settings)]
    if uses_mock_repository(service_settings):
        providers.append(MockRepositoryProvider())
    else:
        providers.extend([DatabaseProvider(), RepositoryProvider()])
    return make_async_container(*providers)
