"""Logic for writing diagnostic reports about an aggregation session."""

import json
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from doc_aggregator.compute_config_hash import compute_config_hash

if TYPE_CHECKING:
    from doc_aggregator.aggregator import Aggregator


class AggregationReport:
    """Collects the outcome of an aggregation session and writes it as JSON."""

    def __init__(self) -> None:
        """Initialize an empty report."""
        self.config_hash = ""
        self.start_time = time.time()
        self.stats: dict[str, Any] = {}
        self.classes: list[dict[str, Any]] = []

    def add_aggregator(self, aggregator: "Aggregator") -> None:
        """Record the config hash, stats and per-class member counts of a session."""
        self.config_hash = compute_config_hash(aggregator.config)
        self.stats = aggregator.stats()
        self.classes = [
            {
                "name": cls.name,
                "placeholder": cls.name in self.stats["placeholders"],
                "members": {
                    kind: len(members) for kind, members in cls.members.items()
                },
                "statics": {
                    kind: len(members) for kind, members in cls.statics.items()
                },
            }
            for cls in aggregator.registry.classes()
        ]

    def generate_report(self, path: str) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": self.config_hash,
                "total_classes": len(self.classes),
            },
            "classes": self.classes,
            "stats": self.stats,
        }

        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")
