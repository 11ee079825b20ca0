"""
LLM Learn Kana

Kana, vocabulary and numeral drills with mastery tracking, usable as an
llm plugin or through the Flask app.
"""

from . import structured
from . import data
from . import sampler
from . import matcher
from . import scheduler
from . import session

__version__ = "0.1.0"
__all__ = ["structured", "data", "sampler", "matcher", "scheduler", "session"]
