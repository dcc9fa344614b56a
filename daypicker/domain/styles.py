"""Cell style records and label style lookup.

The "today" style is not a subclass of the day style: ``TodayCellStyle`` is an
override record whose unset fields fall back to the base ``DayCellStyle``. The
two are merged explicitly when a label style is looked up.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from daypicker.domain.models import CellViewState

logger = logging.getLogger(__name__)


class DayCellStyle(BaseModel):
    """Base style of a day cell."""

    date_label_color: str = Field(default="#000000", description="Default label color")
    date_label_unavailable_color: str = Field(
        default="#c7c7cc", description="Label color of disabled days"
    )
    selected_label_color: str = Field(default="#ffffff", description="Label color on highlight")
    on_range_label_color: str = Field(default="#000000", description="Label color inside a band")
    selected_background_color: str = Field(default="#007aff", description="Endpoint highlight")
    on_range_background_color: str = Field(default="#007aff33", description="Range band fill")
    range_corner_radius: float = Field(default=6.0, description="Rounded band edge radius")

    model_config = ConfigDict(frozen=True)


class TodayCellStyle(BaseModel):
    """Overrides applied to today's cell. Unset label fields inherit from the day style."""

    date_label_color: Optional[str] = None
    date_label_unavailable_color: Optional[str] = None
    selected_label_color: Optional[str] = None
    on_range_label_color: Optional[str] = None
    circle_color: str = "#007aff"
    circle_unavailable_color: str = "#c7c7cc"
    circle_selected_color: str = "#ffffff"
    circle_on_range_color: str = "#007aff"

    model_config = ConfigDict(frozen=True)


class ResolvedLabelStyle(BaseModel):
    """Colors picked for one cell."""

    label_color: str
    circle_color: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class StyleSet(BaseModel):
    """Base day style plus an optional today override."""

    day: DayCellStyle = Field(default_factory=DayCellStyle)
    today: Optional[TodayCellStyle] = Field(default_factory=TodayCellStyle)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_mapping(cls, data: Optional[dict[str, Any]]) -> StyleSet:
        """Build a style set from the ``styles:`` config mapping.

        Invalid mappings are logged and replaced with defaults.
        """
        if not data:
            return cls()
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid styles configuration, using defaults: %s", e)
            return cls()

    def merged_day_style(self, is_today: bool) -> DayCellStyle:
        """Base style with today's label overrides applied when relevant."""
        if not is_today or self.today is None:
            return self.day
        overrides = {
            name: value
            for name, value in self.today.model_dump(
                include={
                    "date_label_color",
                    "date_label_unavailable_color",
                    "selected_label_color",
                    "on_range_label_color",
                }
            ).items()
            if value is not None
        }
        return self.day.model_copy(update=overrides)

    def label_style(self, state: CellViewState) -> ResolvedLabelStyle:
        """Pick label (and today circle) colors for a cell.

        Precedence: disabled, then endpoint highlight, then range band, then default.
        """
        style = self.merged_day_style(state.is_today)
        today = self.today if state.is_today else None

        if not state.enabled:
            return ResolvedLabelStyle(
                label_color=style.date_label_unavailable_color,
                circle_color=today.circle_unavailable_color if today else None,
            )
        if state.selected_highlight_visible:
            return ResolvedLabelStyle(
                label_color=style.selected_label_color,
                circle_color=today.circle_selected_color if today else None,
            )
        if state.band_visible:
            return ResolvedLabelStyle(
                label_color=style.on_range_label_color,
                circle_color=today.circle_on_range_color if today else None,
            )
        return ResolvedLabelStyle(
            label_color=style.date_label_color,
            circle_color=today.circle_color if today else None,
        )
