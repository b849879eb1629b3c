"""CareSync backend - medication scheduling, adherence and vitals tracking."""

__version__ = "1.0.0"
