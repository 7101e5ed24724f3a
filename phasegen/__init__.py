"""phasegen -- scaffold generator for phase-driven Kubernetes operators."""

__version__ = "0.1.0"
