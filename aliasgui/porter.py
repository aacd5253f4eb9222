import json
import yaml
from pathlib import Path
from datetime import datetime
from typing import List, Dict, Any

from aliasgui.models import AliasRecord


class AliasPorter:
    """Handle import and export of alias lists"""

    def export_to_dict(self, records: List[AliasRecord]) -> Dict[str, Any]:
        """Export records to a dictionary format"""
        return {
            "version": "1.0",
            "exported_at": datetime.now().isoformat(),
            "count": len(records),
            "aliases": [
                {"name": r.name, "command": r.command, "hasParams": r.has_params}
                for r in records
            ],
        }

    def export_to_file(self, records: List[AliasRecord], filepath: Path, format: str = "json") -> tuple[bool, str]:
        """Export records to a file"""
        data = self.export_to_dict(records)

        try:
            with open(filepath, "w") as f:
                if format == "yaml":
                    yaml.dump(data, f, default_flow_style=False, sort_keys=False)
                else:  # json
                    json.dump(data, f, indent=2)
        except OSError as e:
            return False, f"Export failed: {e}"

        return True, f"Exported {data['count']} aliases to {Path(filepath).name}"

    def load_payload(self, filepath: Path) -> List[Any]:
        """Read an alias list from an export document or a bare list

        The entries are returned unvalidated, ready for the save request.

        Raises:
            ValueError: when the file is not an alias list
        """
        filepath = Path(filepath)
        with open(filepath, "r") as f:
            if filepath.suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        if isinstance(data, dict):
            if "aliases" not in data:
                raise ValueError("Invalid format: missing 'aliases' field")
            data = data["aliases"]

        if not isinstance(data, list):
            raise ValueError("Invalid format: expected a list of aliases")
        return data
