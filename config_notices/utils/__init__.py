from .capabilities import RuntimeCapabilities
from .filesystem import FilesystemError, LocalFilesystem, ProbeResult, probe_round_trip
from .settings import SettingsStore

__all__ = [
    "RuntimeCapabilities",
    "FilesystemError",
    "LocalFilesystem",
    "ProbeResult",
    "probe_round_trip",
    "SettingsStore",
]
