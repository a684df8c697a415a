"""
Fertility Prognosis Engine

Turns clinical intake values into a per-cycle spontaneous-conception
probability, a categorised clinical report and ranked treatment suggestions.
"""
from fertility import config
from fertility.utils.logging import setup_logging

setup_logging(config.LOG_LEVEL, config.LOG_FILE or None)

__version__ = "1.0.0"
