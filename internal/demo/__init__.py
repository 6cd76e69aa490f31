"""
Demo module: people cache walkthrough for lib.map_cache
"""

from .models import Gender, People, Person, buildPeople, buildPerson
from .runner import DemoReport, DemoRunner

__all__ = [
    # Models
    "Gender",
    "Person",
    "People",
    "buildPerson",
    "buildPeople",
    # Runner
    "DemoRunner",
    "DemoReport",
]
