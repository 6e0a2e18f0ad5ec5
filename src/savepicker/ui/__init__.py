"""Picker state machine and its front ends (headless, console, Arcade)."""
from .picker import PickerFactory, PickerSession, PickerState, PickerStateMachine
from .view import HeadlessView, ListingEntry, PickerView, RenderModel

__all__ = [
    "HeadlessView",
    "ListingEntry",
    "PickerFactory",
    "PickerSession",
    "PickerState",
    "PickerStateMachine",
    "PickerView",
    "RenderModel",
]
