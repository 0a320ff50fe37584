"""
Explicit context handed to components at construction.

Replaces looking up shared notification and translation services from
global state: each component reports changes to its own notifier and names
itself through its own translator.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from .config import ComponentDefaults
from .events import ChangeType, ComponentChangeEvent, ChangeListener
from .strings import Translator

logger = logging.getLogger(__name__)


@dataclass
class ComponentContext:
    """Notifier, translator and defaults shared by a set of components"""
    notifier: Optional[ChangeListener] = None
    translator: Translator = field(default_factory=Translator)
    defaults: ComponentDefaults = field(default_factory=ComponentDefaults)

    def notify(self, source: object, change: ChangeType):
        """Deliver one change event to the notifier, if any"""
        logger.debug(f"{type(source).__name__} changed: {change}")
        if self.notifier is not None:
            self.notifier(ComponentChangeEvent(source, change))
