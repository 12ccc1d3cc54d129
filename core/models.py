# core/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

REPORT_VERSION = "1.0.0"


@dataclass(frozen=True)
class RunContext:
    """Values read from the invoking session once, at the start of a run."""
    computer: str
    operator: str
    generated_at: str


@dataclass
class SectionResult:
    """
    Outcome of a best-effort section.

    On failure `not_checked` is True, `items` is empty and `error` carries
    the reason, the same shape the listening-ports check used for
    privileged calls.
    """
    items: list[dict[str, Any]] = field(default_factory=list)
    not_checked: bool = False
    error: str | None = None
    remediation: str | None = None


@dataclass
class InventoryReport:
    computer: str
    generated_at: str
    generated_by: str
    general: dict[str, Any]
    boot_configuration: dict[str, Any]
    bios: dict[str, Any]
    operating_system: dict[str, Any]
    time_zone: dict[str, Any]
    logical_disks: list[dict[str, Any]]
    disk_drives: list[dict[str, Any]]
    processor: list[dict[str, Any]]
    physical_memory: list[dict[str, Any]]
    network_adapters: list[dict[str, Any]]
    printers: list[dict[str, Any]]
    user_profiles: list[dict[str, Any]]
    hotfixes: list[dict[str, Any]]
    video_controllers: list[dict[str, Any]]
    monitor_count: int
    usb_devices: list[dict[str, Any]]
    last_user_folder_touched: str | None
    installed_products: list[dict[str, Any]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    report_version: str = REPORT_VERSION

    def to_dict(self) -> dict[str, Any]:
        """Return the report with its published top-level key names."""
        return {
            "Computer": self.computer,
            "ReportVersion": self.report_version,
            "GeneratedAt": self.generated_at,
            "GeneratedBy": self.generated_by,
            "General": self.general,
            "BootConfiguration": self.boot_configuration,
            "BIOS": self.bios,
            "OperatingSystem": self.operating_system,
            "TimeZone": self.time_zone,
            "LogicalDisks": self.logical_disks,
            "DiskDrives": self.disk_drives,
            "Processor": self.processor,
            "PhysicalMemory": self.physical_memory,
            "NetworkAdapters": self.network_adapters,
            "Printers": self.printers,
            "UserProfiles": self.user_profiles,
            "Hotfixes": self.hotfixes,
            "VideoControllers": self.video_controllers,
            "MonitorCount": self.monitor_count,
            "USBDevices": self.usb_devices,
            "LastUserFolderTouched": self.last_user_folder_touched,
            "InstalledProducts": self.installed_products,
            "Warnings": self.warnings,
        }
