"""script-report: audit asset dependency registries and explain what loaded and why."""

__version__ = "0.1.0"
