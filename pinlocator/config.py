# config.py
# -*- coding: utf-8 -*-

"""
Cấu hình cho ứng dụng định vị IP và tra cứu bưu cục
"""

IP_API_URL = "https://api.ipify.org"
IP_API_PARAMS = {"format": "json"}

LOCATION_API_URL = "https://ipapi.co/{ip}/json/"

POSTAL_API_URL = "https://api.postalpincode.in/pincode/{pincode}"
POSTAL_SUCCESS_STATUS = "Success"

MAP_EMBED_URL = "https://maps.google.com/maps?q={latitude},{longitude}&z={zoom}&output=embed"
MAP_DEFAULT_ZOOM = 15

REQUEST_TIMEOUT = 8
REQUEST_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "pinlocator/1.0"
}

LOG_DIR = "logs"
