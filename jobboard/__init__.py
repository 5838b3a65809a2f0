"""Job board notifier: matches new job postings to student preferences."""

__version__ = "0.1.0"
