from __future__ import annotations

import logging
from typing import Optional

from .settings import settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging() -> None:
	# Leave an existing setup (uvicorn, pytest) alone
	if not logging.getLogger().handlers:
		logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


def get_logger(name: Optional[str] = None) -> logging.Logger:
	configure_logging()
	return logging.getLogger(name)
