from .cleanup_runner import CleanupRunner, run_cleanup
from .report import ConsoleReport

__all__ = ["CleanupRunner", "ConsoleReport", "run_cleanup"]
