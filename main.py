# main.py
# -*- coding: utf-8 -*-

"""
Entry point cho ứng dụng định vị IP và tra cứu bưu cục
"""

import logging
from pinlocator_app import PinLocatorApp

if __name__ == "__main__":
    from datetime import datetime
    from pathlib import Path

    from pinlocator.config import LOG_DIR

    log_dir = Path(LOG_DIR)
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / f"pinlocator_{datetime.now().strftime('%Y%m%d')}.log"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Khởi động ứng dụng. Log file: {log_file}")

    app = PinLocatorApp()
    app.mainloop()
