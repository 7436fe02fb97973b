"""
ralph archive - List archived runs.
"""

from ralph.lib.config import RalphConfig
from ralph.lib.constants import EXIT_OK


def cmd_archive(args, config: RalphConfig) -> int:
    """List archive folders, oldest first."""
    archive_dir = config.archive_dir
    folders = []
    if archive_dir.exists():
        folders = sorted(d for d in archive_dir.iterdir() if d.is_dir())

    if not folders:
        print("No archived runs")
        return EXIT_OK

    print(f"Archived runs in {archive_dir}")
    print()
    print(f"{'FOLDER':<40} FILES")
    print("-" * 60)
    for folder in folders:
        files = ", ".join(sorted(f.name for f in folder.iterdir() if f.is_file()))
        print(f"{folder.name:<40} {files or '(empty)'}")
    print("-" * 60)
    print(f"{len(folders)} archived run(s)")
    return EXIT_OK
