"""
Output Manager — Timestamped run directories and retention cleanup.

Each extraction run writes into a folder under the base output directory
named YYYYMMDD_HHMM_{label} (e.g., "20261016_1430_profile_jane-doe").

Inside each folder the orchestrator saves:
  - profiles.json:           The resolved Profile entities
  - extraction_results.json: Run metadata, counts, errors

Folders older than retention_days are removed before a new run starts.
retention_days=0 keeps everything.
"""

import json
import os
import re
import shutil
from datetime import datetime, timedelta
from typing import Any, Optional

FOLDER_PATTERN = re.compile(r"^(\d{8})_(\d{4})_.*$")


class OutputManager:
    """Creates per-run output folders and prunes old ones.

    Attributes:
        base_dir: Root output directory (default: ./output).
        retention_days: Delete folders older than this many days (0 = keep forever).
        current_dir: The current run's folder, None until create_run_dir() is called.
    """

    def __init__(self, base_dir: str, retention_days: int = 30):
        self.base_dir = base_dir
        self.retention_days = retention_days
        self.current_dir: Optional[str] = None
        self._run_timestamp = datetime.now()

    def create_run_dir(self, label: str) -> str:
        """Create {base_dir}/YYYYMMDD_HHMM_{label} with the label made filesystem-safe."""
        timestamp = self._run_timestamp.strftime("%Y%m%d_%H%M")
        safe_label = "".join(c if c.isalnum() or c in "-_" else "_" for c in label)
        self.current_dir = os.path.join(self.base_dir, f"{timestamp}_{safe_label}")
        os.makedirs(self.current_dir, exist_ok=True)
        return self.current_dir

    def write_json(self, filename: str, data: Any) -> str:
        """Serialize data into the current run folder and return the file path.

        Raises:
            RuntimeError: If create_run_dir() has not been called yet.
        """
        if not self.current_dir:
            raise RuntimeError("Output directory not created. Call create_run_dir() first.")
        path = os.path.join(self.current_dir, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2, default=str)
        return path

    def cleanup_old_folders(self, debug: bool = False) -> int:
        """Remove run folders older than retention_days.

        Only folders whose names match the YYYYMMDD_HHMM_* pattern are
        considered; anything else in base_dir is left alone.

        Returns:
            The number of folders deleted.
        """
        if self.retention_days <= 0 or not os.path.exists(self.base_dir):
            return 0

        deleted = 0
        cutoff = datetime.now() - timedelta(days=self.retention_days)

        for folder_name in os.listdir(self.base_dir):
            folder_path = os.path.join(self.base_dir, folder_name)
            if not os.path.isdir(folder_path):
                continue

            match = FOLDER_PATTERN.match(folder_name)
            if not match:
                continue

            try:
                created = datetime.strptime(f"{match.group(1)}_{match.group(2)}", "%Y%m%d_%H%M")
                if created < cutoff:
                    shutil.rmtree(folder_path)
                    deleted += 1
                    if debug:
                        print(f"  Deleted old output folder: {folder_name}")
            except (ValueError, OSError) as e:
                if debug:
                    print(f"  Warning: Could not process folder {folder_name}: {e}")

        return deleted
