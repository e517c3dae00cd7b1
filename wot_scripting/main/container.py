"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from wot_scripting.application.models import NodeDefaults, SystemInfo
from wot_scripting.application.services import (
    OperationDispatcher,
    OutputRouter,
    SessionCache,
)
from wot_scripting.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from wot_scripting.application.use_cases.perform_operation_use_case import (
    PerformOperationUseCase,
)
from wot_scripting.infrastructure.runtime import HttpThingRuntime
from wot_scripting.infrastructure.services import HealthCheckService
from wot_scripting.infrastructure.stores import ContextRegistry
from wot_scripting.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value):
    return value.value if hasattr(value, "value") else str(value)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    thing_runtime = providers.Singleton(
        HttpThingRuntime,
        timeout=config.runtime.http_timeout,
        long_poll_timeout=config.runtime.long_poll_timeout,
        verify_tls=config.runtime.verify_tls,
    )

    context_registry = providers.Singleton(ContextRegistry)

    # Application services
    session_cache = providers.Singleton(SessionCache)

    operation_dispatcher = providers.Singleton(OperationDispatcher)

    output_router = providers.Singleton(OutputRouter)

    node_defaults = providers.Singleton(
        NodeDefaults,
        operation_type=config.node.operation_type,
        affordance_name=config.node.affordance_name,
        affordance_type=config.node.affordance_type,
        filter_mode=config.node.filter_mode,
        input_value=config.node.input_value,
        input_value_type=providers.Callable(
            _enum_value, config.node.input_value_type
        ),
        output_var=config.node.output_var,
        output_var_type=config.node.output_var_type,
        output_payload=config.node.output_payload,
        cache_minutes=config.node.cache_minutes,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        thing_runtime=thing_runtime,
        session_cache=session_cache,
        context_registry=context_registry,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(_enum_value, config.environment),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        default_cache_minutes=config.node.cache_minutes,
        runtime_http_timeout=config.runtime.http_timeout,
    )

    # Application (use cases)
    perform_operation_use_case = providers.Factory(
        PerformOperationUseCase,
        thing_runtime=thing_runtime,
        session_cache=session_cache,
        dispatcher=operation_dispatcher,
        output_router=output_router,
        node_defaults=node_defaults,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for the runtime and the session cache.

    The thing runtime is started before the first request is served. On
    shutdown the cached sessions are dropped before the runtime releases
    its connections.
    """
    container = get_container()

    thing_runtime = container.thing_runtime()
    session_cache = container.session_cache()

    try:
        logger.info("container.thing_runtime.start")
        await thing_runtime.start()

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.session_cache.close", size=len(session_cache))
        session_cache.close()

        logger.info("container.thing_runtime.shutdown")
        await thing_runtime.shutdown()

        logger.info("container.resources.shutdown")
