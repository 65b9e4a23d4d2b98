from .backup import AutoBackupHandler, BackupNowHandler
from .insights import AIOptimizationHandler, HealthCheckHandler, SecurityScanHandler
from .maintenance import LogRotationHandler
from .registry import HandlerRegistry
from .schema import SchemaSyncHandler
from .sync import AutoSyncHandler

__all__ = [
    "AIOptimizationHandler",
    "AutoBackupHandler",
    "AutoSyncHandler",
    "BackupNowHandler",
    "HandlerRegistry",
    "HealthCheckHandler",
    "LogRotationHandler",
    "SchemaSyncHandler",
    "SecurityScanHandler",
]
