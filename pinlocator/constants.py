# constants.py
# -*- coding: utf-8 -*-

"""
Constants cho ứng dụng định vị IP và tra cứu bưu cục
"""

# Placeholders
PLACEHOLDER_NA = "N/A"
PLACEHOLDER_LOADING_IP = "Loading..."

# Stage messages
MSG_IP_FAILED = "Failed to load IP."
MSG_LOCATION_FAILED = "Could not retrieve detailed location information."
MSG_PINCODE_NOT_AVAILABLE = "Pincode not available."
MSG_NO_POST_OFFICES = "No post offices found for this pincode."
MSG_POST_OFFICES_FAILED = "Failed to load post office data."
MSG_NO_SEARCH_MATCHES = "No post offices match your search criteria."
MSG_TIME_FAILED = "Error displaying time."
MSG_MAP_UNAVAILABLE = "Map not available for this location."

# Location field labels (thứ tự hiển thị)
LOCATION_LABELS = [
    ("ip", "IP Address"),
    ("city", "City"),
    ("organization", "Organisation"),
    ("latitude", "Latitude"),
    ("longitude", "Longitude"),
    ("region", "Region"),
    ("timezone", "Timezone"),
    ("postal_code", "Pincode"),
]

# Post office field labels
POST_OFFICE_LABELS = [
    ("name", "Name"),
    ("branch_type", "Branch Type"),
    ("delivery_status", "Delivery Status"),
    ("district", "District"),
    ("division", "Division"),
]

# Excel export
EXCEL_SHEET_TITLE = "Post Offices"
ALLOWED_EXCEL_EXTENSIONS = ['.xlsx']

# Dialog Titles
TITLE_APP = "Pincode Locator"
TITLE_ERROR = "Error"
TITLE_INFO = "Information"
TITLE_EXPORT_ERROR = "Export failed"

# Success Messages
SUCCESS_EXPORT = "Exported {count} post offices to:\n{file_path}"
MSG_NOTHING_TO_EXPORT = "There are no post offices to export yet."
