# -*- coding: utf-8 -*-

"""
View classes for PinLocatorApp UI components.
Each view is a self-contained tk.Frame that handles its own UI and exposes callbacks.
"""

from views.ip_frame import IpFrame
from views.location_frame import LocationFrame
from views.search_frame import SearchFrame
from views.post_office_frame import PostOfficeFrame

__all__ = [
    "IpFrame",
    "LocationFrame",
    "SearchFrame",
    "PostOfficeFrame",
]
