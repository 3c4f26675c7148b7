"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.models import MonitoringConfig, SystemInfo
from src.application.use_cases.catalog_use_cases import (
    GetCameraRecordingsUseCase,
    GetNasDetailsUseCase,
    GetRecentLogsUseCase,
    GetRecentSamplesUseCase,
    ListCamerasUseCase,
)
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetServiceHealthUseCase,
)
from src.application.use_cases.status_use_cases import (
    GetLegacyStatusUseCase,
    GetSubsystemStatusUseCase,
    GetUnifiedStatusUseCase,
)
from src.infrastructure.collectors import (
    NetworkCollector,
    RecordingCollector,
    SampleExtractorCollector,
    StorageCollector,
    TransferServiceCollector,
)
from src.infrastructure.probes import (
    DirectoryListProbe,
    DiskUsageProbe,
    FileCountProbe,
    FileListProbe,
    LogTailProbe,
    MountProbe,
    ProcessProbe,
    ReachabilityProbe,
    ScheduleProbe,
)
from src.infrastructure.services.recording_catalog import RecordingCatalog
from src.infrastructure.services.status_aggregator import StatusAggregator
from src.shared import SERVICE_NAME, get_logger

from .config import AppSettings

logger = get_logger(__name__)

API_MODULES = ("/api/monitoring",)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    monitoring_config = providers.Singleton(
        MonitoringConfig.from_dict,
        monitoring=config.monitoring,
        timeouts=config.timeouts,
    )

    # Probes
    process_probe = providers.Singleton(ProcessProbe)
    mount_probe = providers.Singleton(MountProbe)
    disk_usage_probe = providers.Singleton(DiskUsageProbe)
    reachability_probe = providers.Singleton(ReachabilityProbe)
    schedule_probe = providers.Singleton(ScheduleProbe)
    file_count_probe = providers.Singleton(FileCountProbe)
    file_list_probe = providers.Singleton(FileListProbe)
    directory_probe = providers.Singleton(DirectoryListProbe)
    log_tail_probe = providers.Singleton(LogTailProbe)
    # Command lines of every recorder are needed to tell cameras apart.
    catalog_process_probe = providers.Singleton(ProcessProbe, detail_limit=64)

    # Collectors
    recording_collector = providers.Singleton(
        RecordingCollector,
        config=monitoring_config,
        process_probe=process_probe,
        file_count_probe=file_count_probe,
    )

    transfer_collector = providers.Singleton(
        TransferServiceCollector,
        config=monitoring_config,
        process_probe=process_probe,
        schedule_probe=schedule_probe,
        mount_probe=mount_probe,
    )

    sample_extractor_collector = providers.Singleton(
        SampleExtractorCollector,
        config=monitoring_config,
        process_probe=process_probe,
        schedule_probe=schedule_probe,
        file_count_probe=file_count_probe,
    )

    storage_collector = providers.Singleton(
        StorageCollector,
        config=monitoring_config,
        disk_usage_probe=disk_usage_probe,
        mount_probe=mount_probe,
    )

    network_collector = providers.Singleton(
        NetworkCollector,
        config=monitoring_config,
        reachability_probe=reachability_probe,
    )

    status_aggregator = providers.Singleton(
        StatusAggregator,
        collectors=providers.List(
            recording_collector,
            transfer_collector,
            sample_extractor_collector,
            storage_collector,
            network_collector,
        ),
        thresholds=monitoring_config.provided.thresholds,
        global_deadline=monitoring_config.provided.timeouts.global_deadline,
    )

    recording_catalog = providers.Singleton(
        RecordingCatalog,
        config=monitoring_config,
        file_list_probe=file_list_probe,
        file_count_probe=file_count_probe,
        directory_probe=directory_probe,
        log_tail_probe=log_tail_probe,
        process_probe=catalog_process_probe,
        mount_probe=mount_probe,
        disk_usage_probe=disk_usage_probe,
        schedule_probe=schedule_probe,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        data_dir=monitoring_config.provided.data_dir,
        nas_host=monitoring_config.provided.nas_host,
        mount_paths=providers.Callable(
            lambda cfg: tuple(mount.path for mount in cfg.mounts),
            monitoring_config,
        ),
    )

    # Application (use cases)
    get_unified_status_use_case = providers.Factory(
        GetUnifiedStatusUseCase,
        status_aggregator=status_aggregator,
    )

    get_subsystem_status_use_case = providers.Factory(
        GetSubsystemStatusUseCase,
        status_aggregator=status_aggregator,
    )

    get_legacy_status_use_case = providers.Factory(
        GetLegacyStatusUseCase,
        status_aggregator=status_aggregator,
    )

    get_recent_samples_use_case = providers.Factory(
        GetRecentSamplesUseCase,
        recording_catalog=recording_catalog,
    )

    list_cameras_use_case = providers.Factory(
        ListCamerasUseCase,
        recording_catalog=recording_catalog,
    )

    get_camera_recordings_use_case = providers.Factory(
        GetCameraRecordingsUseCase,
        recording_catalog=recording_catalog,
    )

    get_recent_logs_use_case = providers.Factory(
        GetRecentLogsUseCase,
        recording_catalog=recording_catalog,
    )

    get_nas_details_use_case = providers.Factory(
        GetNasDetailsUseCase,
        recording_catalog=recording_catalog,
    )

    get_service_health_use_case = providers.Factory(
        GetServiceHealthUseCase,
        service_name=SERVICE_NAME,
        modules=API_MODULES,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        status_aggregator=status_aggregator,
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
    Centralized lifecycle management for the monitoring core.

    Builds the aggregator eagerly so configuration errors surface at
    startup, and settles any abandoned collector tasks on shutdown.
    """
    container = get_container()
    aggregator = container.status_aggregator()
    monitoring = container.monitoring_config()
    logger.info(
        "container.monitoring.ready",
        data_dir=monitoring.data_dir,
        mounts=len(monitoring.mounts),
        nas_host=monitoring.nas_host,
        deadline=monitoring.timeouts.global_deadline,
    )

    try:
        yield container
    finally:
        await aggregator.aclose()
        logger.info("container.monitoring.closed")
