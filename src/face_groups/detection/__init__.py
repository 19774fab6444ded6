"""Face detection: the detector adapter and the per-batch runner."""
