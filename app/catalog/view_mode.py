"""
View-mode controller.

Tracks the listing layout density. Layout never affects which products are
visible.
"""

from __future__ import annotations

import logging
from typing import Union

from app.core import exceptions
from .models import ViewMode


# Module logger
logger = logging.getLogger(__name__)


class ViewModeController:
    """Holds exactly one of grid or list."""

    def __init__(self, initial: Union[ViewMode, str] = ViewMode.GRID) -> None:
        self._mode = self._coerce(initial)

    @staticmethod
    def _coerce(mode: Union[ViewMode, str]) -> ViewMode:
        if isinstance(mode, ViewMode):
            return mode
        if isinstance(mode, str):
            try:
                return ViewMode(mode)
            except ValueError:
                pass
        raise exceptions.invalid_view_mode(mode)

    def current(self) -> ViewMode:
        return self._mode

    def set(self, mode: Union[ViewMode, str]) -> bool:
        """
        Switch layout density.

        Returns:
            True if the mode changed, False when it was already held

        Raises:
            AppException: INVALID_VIEW_MODE; the current mode is kept
        """
        new_mode = self._coerce(mode)
        if new_mode == self._mode:
            return False

        logger.debug(f"View mode {self._mode.value} → {new_mode.value}")
        self._mode = new_mode
        return True

    def select_grid(self) -> bool:
        return self.set(ViewMode.GRID)

    def select_list(self) -> bool:
        return self.set(ViewMode.LIST)
