"""Host framework: selectable items and ordered single-selection collections."""
from src.models.item import SelectableItem
from src.models.collection import DeselectCause, DeselectContext, SelectOneCollection

__all__ = ["SelectableItem", "SelectOneCollection", "DeselectCause", "DeselectContext"]
