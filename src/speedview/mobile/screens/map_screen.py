"""
Map screen for SpeedView.

Map centered on the current position with a location info overlay.
"""

import logging

from kivy.uix.button import Button
from kivy.uix.floatlayout import FloatLayout
from kivy_garden.mapview import MapMarker, MapView

from ...core.config import Config
from ...core.location_source import LocationSource
from ...core.samples import LocationState
from ...core.units import SpeedUnit
from ..widgets.location_info import LocationInfoPanel

logger = logging.getLogger(__name__)

DEFAULT_LATITUDE = 35.6762
DEFAULT_LONGITUDE = 139.6503
DEFAULT_ZOOM = 16


class MapScreen(FloatLayout):
    """
    Map tab.

    Layout:
    ┌─────────────────────────────────────┐
    │  ┌──────────────────┐               │
    │  │ Speed: 36.0 km/h │               │
    │  │ Altitude: ...    │     MAP       │
    │  └──────────────────┘               │
    │                 ●                   │
    │                              [◎]    │
    └─────────────────────────────────────┘
    """

    def __init__(
        self,
        location_source: LocationSource,
        config: Config,
        unit: SpeedUnit = SpeedUnit.MPS,
        **kwargs,
    ):
        """
        Initialize the map screen.

        Args:
            location_source: Shared LocationSource owned by the root screen.
            config: Application configuration (map section).
            unit: Initially selected speed unit.
        """
        super().__init__(**kwargs)

        self.location_source = location_source
        self.config = config
        self.unit = unit

        self._create_ui()

        self._listener = self.location_source.subscribe(self._on_state)
        self._render(self.location_source.state)

    def _create_ui(self):
        """Create all UI components."""
        latitude = self.config.get("map.latitude", DEFAULT_LATITUDE)
        longitude = self.config.get("map.longitude", DEFAULT_LONGITUDE)

        # Map (full screen background)
        self.map_view = MapView(
            lat=latitude,
            lon=longitude,
            zoom=self.config.get("map.zoom", DEFAULT_ZOOM),
            size_hint=(1, 1),
            pos_hint={"x": 0, "y": 0},
        )
        self.add_widget(self.map_view)

        # User location marker, added on first fix
        self.marker = MapMarker(lat=latitude, lon=longitude)
        self._marker_visible = False

        # Info overlay (top-left)
        self.info_panel = LocationInfoPanel(pos_hint={"x": 0.03, "top": 0.97})
        self.add_widget(self.info_panel)

        # Re-center button (bottom-right)
        locate_btn = Button(
            text="Center",
            size_hint=(None, None),
            size=(90, 44),
            font_size="14sp",
            pos_hint={"right": 0.97, "y": 0.03},
        )
        locate_btn.bind(on_press=self._on_locate_press)
        self.add_widget(locate_btn)

    def _on_state(self, state: LocationState) -> None:
        self._render(state)

    def _render(self, state: LocationState) -> None:
        self.info_panel.update(state, self.unit)

        if state.location is None:
            return

        self.marker.lat = state.location.latitude
        self.marker.lon = state.location.longitude
        if not self._marker_visible:
            self.map_view.add_marker(self.marker)
            self._marker_visible = True
            logger.info("First location fix shown on map")
        self.map_view.center_on(state.location.latitude, state.location.longitude)

    def _on_locate_press(self, instance):
        """Re-center the map on the last known position."""
        location = self.location_source.location
        if location is None:
            logger.info("No location fix yet; nothing to center on")
            return
        self.map_view.center_on(location.latitude, location.longitude)

    def set_unit(self, unit: SpeedUnit) -> None:
        """
        Switch the display unit used by the info panel.

        Args:
            unit: New speed unit.
        """
        self.unit = unit
        self.info_panel.update(self.location_source.state, unit)

    def detach(self) -> None:
        """Stop listening for location changes."""
        self.location_source.unsubscribe(self._listener)
