"""
Driver registry and driver construction.

Importing this subpackage pulls in Selenium and Appium through
:mod:`.factory`; code that only needs the registry can import
``qa_core.drivers.registry`` directly.
"""

from .factory import create_driver, load_factory
from .registry import DriverRegistry

__all__ = ["DriverRegistry", "create_driver", "load_factory"]
