# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Exporter for generated puzzle payloads.

Writes adapter results in YAML (default) or JSON, one document per puzzle.
"""

import json
import os
from datetime import datetime
from typing import Any, Dict, Optional

import yaml

from adapter import AdapterResult


class ExportError(Exception):
    """Raised when a payload cannot be exported."""
    pass


class PuzzleExporter:
    """
    Serializes adapter results.

    Usage:
        exporter = PuzzleExporter(fmt="yaml")
        text = exporter.export(result)
        exporter.save(result, 'output/puzzle_42.yaml')
    """

    def __init__(self, fmt: str = "yaml"):
        if fmt not in ("yaml", "json"):
            raise ExportError(f"Unsupported export format '{fmt}'")
        self.fmt = fmt

    @property
    def extension(self) -> str:
        return "yaml" if self.fmt == "yaml" else "json"

    def to_document(
        self, result: AdapterResult, seed: Optional[int] = None
    ) -> Dict[str, Any]:
        """Payload plus export metadata."""
        document = result.to_dict()
        document["metadata"] = {
            "seed": seed,
            "exported_at": datetime.now().isoformat(timespec="seconds"),
        }
        if result.stats:
            document["metadata"]["stats"] = dict(result.stats)
        return document

    def export(self, result: AdapterResult, seed: Optional[int] = None) -> str:
        """
        Export one result to a string.

        Args:
            result: Adapter result (successful or not)
            seed: Seed used, recorded in the metadata

        Returns:
            Serialized document
        """
        document = self.to_document(result, seed)
        if self.fmt == "json":
            return json.dumps(document, ensure_ascii=False, indent=2)
        return yaml.safe_dump(
            document,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )

    def save(
        self, result: AdapterResult, path: str, seed: Optional[int] = None
    ) -> str:
        """
        Write one result to a file, creating parent directories.

        Returns:
            The path written
        """
        text = self.export(result, seed)
        directory = os.path.dirname(path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}")
        return path
