"""
Structured logging system for FactoryMatch.

Provides centralized logging with console and file destinations,
log levels, and metrics tracking for the matching and dedup engines.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for roster fetches, rankings and duplicate scans.
    """

    def __init__(
        self,
        name: str = "factorymatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.metrics = {
            "roster_fetches": 0,
            "rows_fetched": 0,
            "rankings": 0,
            "tier_usage": {},
            "dedup_scans": 0,
            "pairs_compared": 0,
            "duplicate_groups": 0,
            "records_merged": 0,
            "errors_by_type": {},
        }
        self.configure(level=level, log_dir=log_dir, enable_file=enable_file, enable_console=enable_console)

    def configure(
        self,
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """Replace handlers and level; metrics are kept."""
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()  # Remove existing handlers

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"factorymatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_fetch(self, rows: int):
        """Record one full roster fetch and the rows it returned."""
        self.metrics["roster_fetches"] += 1
        self.metrics["rows_fetched"] += rows

    def record_ranking(self, tier: str):
        """Record a ranking call and the filter tier that produced it."""
        self.metrics["rankings"] += 1
        usage = self.metrics["tier_usage"]
        usage[tier] = usage.get(tier, 0) + 1

    def record_dedup_scan(self, pairs_compared: int, groups: int):
        """Record a completed duplicate scan."""
        self.metrics["dedup_scans"] += 1
        self.metrics["pairs_compared"] += pairs_compared
        self.metrics["duplicate_groups"] += groups

    def record_merge(self, removed: int):
        self.metrics["records_merged"] += removed

    def record_failure(self, error_type: str):
        """Record a collaborator failure by exception type."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        rankings = metrics_copy["rankings"]
        if rankings > 0:
            metrics_copy["tier_share"] = {
                tier: round(count / rankings, 3)
                for tier, count in metrics_copy["tier_usage"].items()
            }
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== FactoryMatch Session Metrics ===")
        self.info(f"Roster fetches: {metrics['roster_fetches']} ({metrics['rows_fetched']} rows)")
        self.info(f"Rankings: {metrics['rankings']}")

        if metrics["tier_usage"]:
            self.info("Filter tiers:")
            for tier, count in metrics["tier_usage"].items():
                share = metrics["tier_share"][tier] * 100
                self.info(f"  {tier}: {count} ({share:.1f}%)")

        self.info(
            f"Dedup scans: {metrics['dedup_scans']} "
            f"(pairs={metrics['pairs_compared']}, groups={metrics['duplicate_groups']}, "
            f"merged={metrics['records_merged']})"
        )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "factorymatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
