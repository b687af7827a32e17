"""Trading journal with a bilingual rule-based trading coach."""

__version__ = "0.1.0"
