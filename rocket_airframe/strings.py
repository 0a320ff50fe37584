"""Display strings for component names."""
from typing import Dict, Optional


DEFAULT_STRINGS: Dict[str, str] = {
    "BodyTube.BodyTube": "Body tube",
    "NoseCone.NoseCone": "Nose cone",
    "TrapezoidFinSet.TrapezoidFinSet": "Trapezoidal fin set",
    "InnerTube.InnerTube": "Inner tube",
    "MassObject.MassObject": "Mass component",
}


class Translator:
    """
    String-resource handle passed to components through their context.

    Unknown keys are returned unchanged so a missing translation shows up as
    its key rather than failing.
    """

    def __init__(self, strings: Optional[Dict[str, str]] = None):
        self._strings = dict(DEFAULT_STRINGS)
        if strings:
            self._strings.update(strings)

    def get(self, key: str) -> str:
        return self._strings.get(key, key)
