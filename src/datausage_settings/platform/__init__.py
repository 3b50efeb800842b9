"""Platform collaborator implementations."""

from datausage_settings.platform.snapshot import SnapshotPlatform, SnapshotSubscriptions, build_services

__all__ = ["SnapshotPlatform", "SnapshotSubscriptions", "build_services"]
