"""
SpeedView Kivy Application - Cross-platform GPS speedometer.

Main entry point for the Kivy-based mobile/desktop application.
"""

import logging
import os
import platform as sys_platform
from typing import Callable

# Prevent Kivy from consuming command-line arguments
os.environ["KIVY_NO_ARGS"] = "1"

from kivy.app import App
from kivy.clock import Clock
from kivy.core.window import Window
from kivy.logger import Logger

from ..core.config import Config
from ..core.location_source import LocationSource
from ..providers import get_location_provider
from .screens.root_screen import RootScreen

logger = logging.getLogger(__name__)


class SpeedViewApp(App):
    """
    Main SpeedView Kivy application.

    Coordinates:
    - Positioning (via a LocationProvider)
    - Location state (via LocationSource)
    - UI updates (via RootScreen and its tabs)
    """

    def __init__(self, app_config: Config | None = None, **kwargs):
        """
        Initialize the SpeedView app.

        Args:
            app_config: Optional Config object. If not provided, loads from default location.
        """
        super().__init__(**kwargs)

        # Load configuration (use app_config to avoid conflict with Kivy's config)
        if app_config is None:
            app_config = Config()
        self.app_config = app_config

        self.platform_type = self._detect_platform()

        # Components (initialized in build())
        self.location_provider = None
        self.location_source = None
        self.root_screen = None

        Logger.info(f"SpeedView: Initialized on {sys_platform.system()} ({self.platform_type})")

    def _detect_platform(self) -> str:
        """Detect current platform type."""
        if sys_platform.system() == "Linux":
            # python-for-android ships an 'android' module
            try:
                import android  # noqa: F401
                return "android"
            except ImportError:
                return "desktop"
        return "desktop"

    def build(self):
        """Build the application UI."""
        if self.platform_type == "desktop":
            # Phone-like portrait window
            Window.size = (480, 800)
            self.title = self.app_config.get("app.name", "SpeedView")

        location_config = self.app_config.get("location", {})
        self.location_provider = get_location_provider(location_config, self.platform_type)
        Logger.info(f"SpeedView: Location provider initialized ({type(self.location_provider).__name__})")

        self.location_source = LocationSource(
            provider=self.location_provider,
            dispatch=self._run_on_main_thread,
        )

        self.root_screen = RootScreen(
            location_source=self.location_source,
            config=self.app_config,
        )
        return self.root_screen

    def on_start(self):
        """Called when the application starts."""
        Logger.info("SpeedView: Application starting")
        self.location_source.activate()

    def on_stop(self):
        """Called when the application stops."""
        Logger.info("SpeedView: Application stopping")

        if self.location_source:
            self.location_source.deactivate()

        if self.root_screen:
            self.root_screen.detach()

        Logger.info("SpeedView: Application stopped")

    def _run_on_main_thread(self, callback: Callable[[], None]) -> None:
        """Schedule a provider callback on the Kivy main thread."""
        Clock.schedule_once(lambda dt: callback(), 0)


def run_mobile_app(config: Config | None = None):
    """
    Run the SpeedView mobile/desktop Kivy application.

    Args:
        config: Optional Config object.
    """
    app = SpeedViewApp(app_config=config)
    app.run()
