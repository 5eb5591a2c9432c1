# services/normalization.py
"""
French label <-> internal code mapping for property status and project phase.

Input is coerced to text, trimmed and lower-cased before lookup. Unknown
input maps to None; writers then store the raw value and readers present
the stored value unchanged.
"""
from typing import Any, Optional

PROPERTY_STATUS_CODES = ("sale", "rent", "sold")
PROJECT_PHASE_CODES = ("planned", "ongoing", "delivered")

PROPERTY_STATUS_ALIASES = {
     "vente": "sale",
     "à vendre": "sale",
     "a vendre": "sale",
     "location": "rent",
     "à louer": "rent",
     "a louer": "rent",
     "vendu": "sold",
}

PROJECT_PHASE_ALIASES = {
     "planifié": "planned",
     "planifie": "planned",
     "en cours": "ongoing",
     "livré": "delivered",
     "livre": "delivered",
}

PROPERTY_STATUS_LABELS = {
     "sale": "À vendre",
     "rent": "À louer",
     "sold": "Vendu",
}


def _clean(value: Any) -> Optional[str]:
     if value is None:
          return None
     text = str(value).strip().lower()
     return text or None


def _lookup(value: Any, codes, aliases) -> Optional[str]:
     text = _clean(value)
     if text is None:
          return None
     if text in codes:
          return text
     return aliases.get(text)


def normalize_prop_status(value: Any) -> Optional[str]:
     """Map a property status label or code to sale, rent or sold."""
     return _lookup(value, PROPERTY_STATUS_CODES, PROPERTY_STATUS_ALIASES)


def prop_status_label(code: Any) -> Optional[str]:
     """French display label for a property status code."""
     if code is None:
          return None
     return PROPERTY_STATUS_LABELS.get(str(code))


def normalize_phase(value: Any) -> Optional[str]:
     """Map a project phase label or code to planned, ongoing or delivered."""
     return _lookup(value, PROJECT_PHASE_CODES, PROJECT_PHASE_ALIASES)


def status_for_storage(value: Any) -> Optional[str]:
     """Write path for property status: normalized code, else the raw input."""
     if value is None:
          return None
     return normalize_prop_status(value) or value


def phase_for_storage(value: Any) -> Optional[str]:
     """Write path for project phase: normalized code, else the raw input."""
     if value is None:
          return None
     return normalize_phase(value) or value
