"""
Logging for news_hub
====================

```python
from news_hub.core.logging import setup_logging, get_logger, RequestContext

setup_logging()
logger = get_logger(__name__)

async with RequestContext():
    logger.info("Fetching news")  # Includes [request_id] in log
```
"""

from news_hub.core.logging.config import (
    LoggerMixin,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from news_hub.core.logging.context import (
    RequestContext,
    clear_request_id,
    get_request_id,
    set_request_id,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "shutdown_logging",
    "LoggerMixin",
    "RequestContext",
    "get_request_id",
    "set_request_id",
    "clear_request_id",
]
