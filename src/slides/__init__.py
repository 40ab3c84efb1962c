"""
Gesture Presenter Slides Module

Slide storage and presentation navigation.
"""
from .deck import Slide, SlideDeck
from .library import (
    SlideLibrary,
    SlideError,
    UnsupportedFileError,
    FileTooLargeError,
    SlideNotFoundError,
)

__all__ = [
    'Slide',
    'SlideDeck',
    'SlideLibrary',
    'SlideError',
    'UnsupportedFileError',
    'FileTooLargeError',
    'SlideNotFoundError',
]
