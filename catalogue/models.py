"""
catalogue/models.py -- Domain dataclasses for the shared design option catalogue.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Option:
    """A named design choice grouped under a topic (e.g. name="Oak", type="Flooring")."""

    name: str
    type: str
    id: Optional[int] = None


@dataclass
class OptionGroup:
    """One topic and its option names, as submitted when saving preferences."""

    topic_name: str
    options: list[str] = field(default_factory=list)
