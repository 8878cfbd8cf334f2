"""kdiff - compare workload images across Kubernetes contexts."""

__version__ = "0.1.0"
