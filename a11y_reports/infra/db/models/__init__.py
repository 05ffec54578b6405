from .scan_result import SCAN_RESULTS_TABLE, ScanResultRecord  # noqa: F401
