# src/ui/signals.py
from PySide6.QtCore import QObject, Signal

class AppSignals(QObject):
    # resource id that was approved / edited / deleted
    resources_changed = Signal(object)

signals = AppSignals()
