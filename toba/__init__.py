"""Global configuration, project settings and a step pipeline for local WordPress projects."""

__version__ = "1.2.1"