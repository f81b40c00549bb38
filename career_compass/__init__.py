"""Career Compass: questionnaire-driven career matching."""

__version__ = "0.1.0"
