from .metrics import Counter, Histogram, kv_requests_total, kv_storage_latency_seconds

__all__ = ["Counter", "Histogram", "kv_requests_total", "kv_storage_latency_seconds"]
