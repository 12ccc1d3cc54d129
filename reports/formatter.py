"""
    Console summary printed after the report is written
"""
from pathlib import Path

from core.models import InventoryReport

SECTIONS = (
    ("Logical disks", "logical_disks"),
    ("Disk drives", "disk_drives"),
    ("Processors", "processor"),
    ("Memory modules", "physical_memory"),
    ("Network adapters", "network_adapters"),
    ("Printers", "printers"),
    ("User profiles", "user_profiles"),
    ("Hotfixes", "hotfixes"),
    ("Video controllers", "video_controllers"),
    ("USB devices", "usb_devices"),
    ("Installed products", "installed_products"),
)


def print_helper(print_line, dict_item):
    print(f"\n{print_line}:")
    for key, value in dict_item.items():
        print(f"  {key}: {value}")


def print_summary(report: InventoryReport, out_path: Path | None = None):
    print_helper("Host", {
        "Computer": report.computer,
        "Generated at": report.generated_at,
        "Generated by": report.generated_by,
        "Operating system": report.operating_system.get("Caption"),
        "Last user folder": report.last_user_folder_touched,
    })
    print_helper("Sections", {label: len(getattr(report, attr)) for label, attr in SECTIONS})
    print(f"  Monitors: {report.monitor_count}")

    if report.warnings:
        print("\nWarnings:")
        for warning in report.warnings:
            print(f"  [!] {warning}")

    if out_path is not None:
        print(f"\nReport saved to {out_path}")
